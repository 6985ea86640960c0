from fastapi import APIRouter, Depends
from app.config import settings
from app.core.dependencies import get_current_user
from app.database.supabase_client import get_service_supabase
from app.modules.accounts.schemas import (
    AccountDeletionResponse, MapboxTokenUpdate, MapboxTokenSaved, MapboxTokenResponse
)
from app.modules.accounts.service import AccountService, MapboxTokenService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/accounts", tags=["accounts"])


def get_account_service(supabase: Client = Depends(get_service_supabase)) -> AccountService:
    return AccountService(supabase)


def get_mapbox_token_service(supabase: Client = Depends(get_service_supabase)) -> MapboxTokenService:
    return MapboxTokenService(supabase, default_token=settings.mapbox_token)


@router.delete("/me", response_model=AccountDeletionResponse)
def delete_my_account(
    current_user: Dict = Depends(get_current_user),
    service: AccountService = Depends(get_account_service)
):
    """Delete the caller's data and auth user"""
    return service.delete_account(current_user["id"])


@router.put("/me/mapbox-token", response_model=MapboxTokenSaved)
def set_mapbox_token(
    body: MapboxTokenUpdate,
    current_user: Dict = Depends(get_current_user),
    service: MapboxTokenService = Depends(get_mapbox_token_service)
):
    """Validate and store the caller's Mapbox token"""
    return service.save_token(current_user["id"], body.token)


@router.get("/me/mapbox-token", response_model=MapboxTokenResponse)
def get_mapbox_token(
    current_user: Dict = Depends(get_current_user),
    service: MapboxTokenService = Depends(get_mapbox_token_service)
):
    return service.get_token(current_user["id"])
