from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user
from app.modules.ai.openai_client import get_openai
from app.modules.ai.schemas import (
    ReviewSummaryRequest, ReviewSummary, CuisineRequest, CuisineResponse,
    MichelinRequest, MichelinResponse, SearchCompletionRequest, SearchCompletionResponse,
    PhotoGenerationRequest, PhotoGenerationResponse
)
from app.modules.ai.service import AIService
from app.modules.places.google_client import GooglePlacesClient, get_google_places_client
from openai import OpenAI
from typing import Dict

router = APIRouter(prefix="/ai", tags=["ai"])


def get_ai_service(openai: OpenAI = Depends(get_openai)) -> AIService:
    return AIService(openai)


def get_review_ai_service(
    openai: OpenAI = Depends(get_openai),
    google: GooglePlacesClient = Depends(get_google_places_client)
) -> AIService:
    return AIService(openai, google)


@router.post("/review-summary", response_model=ReviewSummary, response_model_exclude_none=True)
async def review_summary(
    request: ReviewSummaryRequest,
    current_user: Dict = Depends(get_current_user),
    service: AIService = Depends(get_review_ai_service)
):
    """Structured summary of a place's latest Google reviews"""
    return service.summarize_reviews(request.place_id, request.restaurant_name)


@router.post("/cuisine", response_model=CuisineResponse)
async def determine_cuisine(
    request: CuisineRequest,
    current_user: Dict = Depends(get_current_user),
    service: AIService = Depends(get_ai_service)
):
    return service.determine_cuisine(request.restaurant_name, request.address, request.types)


@router.post("/michelin", response_model=MichelinResponse)
async def detect_michelin_stars(
    request: MichelinRequest,
    current_user: Dict = Depends(get_current_user),
    service: AIService = Depends(get_ai_service)
):
    return service.detect_michelin_stars(request)


@router.post("/search-completions", response_model=SearchCompletionResponse, response_model_exclude_none=True)
async def search_completions(
    request: SearchCompletionRequest,
    current_user: Dict = Depends(get_current_user),
    service: AIService = Depends(get_ai_service)
):
    """Autocomplete suggestions for the restaurant search box"""
    return service.search_completions(request.query, request.location)


@router.post("/photos", response_model=PhotoGenerationResponse)
async def generate_photos(
    request: PhotoGenerationRequest,
    current_user: Dict = Depends(get_current_user),
    service: AIService = Depends(get_ai_service)
):
    """Generated atmosphere and signature-dish images for places without photos"""
    return service.generate_photos(request.restaurant_name, request.cuisine)
