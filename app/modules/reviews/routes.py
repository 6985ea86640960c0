from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user
from app.modules.reviews.schemas import YelpReviewsRequest, YelpReviewsResponse, TripAdvisorRequest
from app.modules.reviews.service import YelpService, TripAdvisorService
from app.modules.reviews.tripadvisor_client import TripAdvisorClient, get_tripadvisor_client
from app.modules.reviews.yelp_client import YelpClient, get_yelp_client
from typing import Any, Dict

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_yelp_service(yelp: YelpClient = Depends(get_yelp_client)) -> YelpService:
    return YelpService(yelp)


def get_tripadvisor_service(tripadvisor: TripAdvisorClient = Depends(get_tripadvisor_client)) -> TripAdvisorService:
    return TripAdvisorService(tripadvisor)


@router.post("/yelp", response_model=YelpReviewsResponse)
async def yelp_reviews(
    request: YelpReviewsRequest,
    current_user: Dict = Depends(get_current_user),
    service: YelpService = Depends(get_yelp_service)
):
    """Best Yelp match for a restaurant with details and latest reviews"""
    return service.get_reviews(request)


@router.post("/tripadvisor")
async def tripadvisor(
    request: TripAdvisorRequest,
    current_user: Dict = Depends(get_current_user),
    service: TripAdvisorService = Depends(get_tripadvisor_service)
) -> Dict[str, Any]:
    """TripAdvisor search, details, photos, reviews, nearby or booking offers"""
    return service.call(request)
