from fastapi import APIRouter, BackgroundTasks, Depends, Query
from app.core.dependencies import get_current_user, get_user_supabase, verify_cache_warmer_secret
from app.database.supabase_client import get_service_supabase
from app.modules.friends.schemas import (
    FriendActivityPage, CacheActionResponse, ActivityWarmResponse,
    FriendProfileResponse, FriendProfileStatsResponse, ProfileCacheBuildResponse,
    CacheWarmResponse
)
from app.modules.friends.service import FriendActivityService, FriendProfileService
from app.modules.friends.cache_warmer import warm_all
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/friends", tags=["friends"])


def get_activity_service(supabase: Client = Depends(get_user_supabase)) -> FriendActivityService:
    return FriendActivityService(supabase)


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> FriendProfileService:
    return FriendProfileService(supabase)


def get_background_profile_service(supabase: Client = Depends(get_service_supabase)) -> FriendProfileService:
    return FriendProfileService(supabase)


def _resolve_target(user_id: str, current_user: Dict) -> str:
    return current_user["id"] if user_id == "me" else user_id


@router.get("/activity", response_model=FriendActivityPage)
async def get_friend_activity(
    page: int = Query(0, ge=0),
    page_size: int = Query(20, ge=1, le=100),
    current_user: Dict = Depends(get_current_user),
    service: FriendActivityService = Depends(get_activity_service)
):
    """Paged activity of the caller's friends, served from the activity cache"""
    return service.get_activity(current_user["id"], page=page, page_size=page_size)


@router.post("/activity/rebuild", response_model=CacheActionResponse)
async def rebuild_friend_activity(
    current_user: Dict = Depends(get_current_user),
    service: FriendActivityService = Depends(get_activity_service)
):
    return service.rebuild_cache(current_user["id"])


@router.post("/activity/warm", response_model=ActivityWarmResponse)
async def warm_friend_activity(
    current_user: Dict = Depends(get_current_user),
    service: FriendActivityService = Depends(get_activity_service)
):
    """Rebuild activity caches of users with friends"""
    return service.warm_cache()


@router.post("/profiles/warm", response_model=CacheActionResponse, status_code=202)
async def warm_friend_profiles(
    background_tasks: BackgroundTasks,
    current_user: Dict = Depends(get_current_user),
    service: FriendProfileService = Depends(get_background_profile_service)
):
    """Start warming every profile cache in the background"""
    background_tasks.add_task(service.warm_all_caches)
    return CacheActionResponse(success=True, message="Cache warming started in background")


@router.get("/profiles/{user_id}", response_model=FriendProfileResponse)
async def get_friend_profile(
    user_id: str,
    force_rebuild: bool = False,
    current_user: Dict = Depends(get_current_user),
    service: FriendProfileService = Depends(get_profile_service)
):
    """Complete cached profile; `me` resolves to the caller"""
    target = _resolve_target(user_id, current_user)
    return service.get_profile(target, current_user["id"], force_rebuild=force_rebuild)


@router.get("/profiles/{user_id}/stats", response_model=FriendProfileStatsResponse)
async def get_friend_profile_stats(
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    service: FriendProfileService = Depends(get_profile_service)
):
    return service.get_profile_stats(_resolve_target(user_id, current_user))


@router.post("/profiles/{user_id}/cache", response_model=ProfileCacheBuildResponse)
async def build_friend_profile_cache(
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    service: FriendProfileService = Depends(get_profile_service)
):
    return service.build_cache(_resolve_target(user_id, current_user))


@router.post("/cache/warm", response_model=CacheWarmResponse)
def warm_all_friend_caches(
    _: None = Depends(verify_cache_warmer_secret),
    supabase: Client = Depends(get_service_supabase)
):
    """Warm profile and activity caches for all active users (cron entry point)"""
    summary = warm_all(supabase)
    return CacheWarmResponse(
        success=True,
        message="Background cache warming completed",
        summary=summary,
    )
