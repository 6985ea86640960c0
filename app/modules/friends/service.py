import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from supabase import Client

from app.modules.friends.schemas import (
    FriendActivityPage, CacheActionResponse, ActivityWarmResponse,
    FriendProfileResponse, FriendProfileStats, FriendProfileStatsResponse,
    ProfileCacheBuildResponse
)

logger = logging.getLogger(__name__)

# Upper bound of users rebuilt by one activity warm request
ACTIVITY_WARM_LIMIT = 50
PROFILE_WARM_BATCH_SIZE = 10
PROFILE_WARM_BATCH_DELAY_SEC = 0.1


def get_active_user_ids(supabase: Client) -> List[str]:
    """Users that own restaurants or appear in a friendship, in first-seen order."""
    user_ids: Dict[str, None] = {}
    restaurants = supabase.table("restaurants").select("user_id").execute()
    for row in restaurants.data or []:
        if row.get("user_id"):
            user_ids[row["user_id"]] = None
    friendships = supabase.table("friends").select("user1_id, user2_id").execute()
    for row in friendships.data or []:
        for key in ("user1_id", "user2_id"):
            if row.get(key):
                user_ids[row[key]] = None
    return list(user_ids)


def _stats_from_profile_data(profile_data: Optional[Dict[str, Any]]) -> FriendProfileStats:
    profile_data = profile_data or {}
    stats = profile_data.get("stats") or {}
    profile = profile_data.get("profile") or {}
    try:
        average_rating = float(stats.get("avg_rating") or 0)
    except (TypeError, ValueError):
        average_rating = 0.0
    return FriendProfileStats(
        ratedCount=stats.get("total_rated") or 0,
        wishlistCount=stats.get("total_wishlist") or 0,
        averageRating=average_rating,
        topCuisine=stats.get("top_cuisine") or "",
        username=profile.get("username") or "Unknown User",
    )


class FriendActivityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_page(self, user_id: str, page: int, page_size: int) -> List[Dict[str, Any]]:
        result = self.supabase.rpc("get_cached_friend_activity", {
            "requesting_user_id": user_id,
            "page_size": page_size,
            "page_offset": page * page_size,
        }).execute()
        return result.data or []

    def _rebuild(self, user_id: str):
        self.supabase.rpc("rebuild_friend_activity_cache", {"target_user_id": user_id}).execute()

    def get_activity(self, user_id: str, page: int = 0, page_size: int = 20) -> FriendActivityPage:
        """Paged friend activity from the cache; builds the cache on a miss"""
        try:
            activities = self._fetch_page(user_id, page, page_size)
        except Exception as e:
            logger.error(f"Error fetching cached activity for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch activity")

        cache_status = "hit"
        if not activities:
            logger.info(f"No cached activity for {user_id}, rebuilding cache")
            try:
                self._rebuild(user_id)
            except Exception as e:
                logger.error(f"Error rebuilding activity cache for {user_id}: {e}")
                raise HTTPException(status_code=500, detail="Failed to rebuild cache")
            try:
                activities = self._fetch_page(user_id, page, page_size)
            except Exception as e:
                logger.error(f"Error fetching rebuilt activity cache for {user_id}: {e}")
                raise HTTPException(status_code=500, detail="Failed to fetch rebuilt cache")
            cache_status = "rebuilt"

        return FriendActivityPage(
            activities=activities,
            cache_status=cache_status,
            page=page,
            page_size=page_size,
            has_more=len(activities) == page_size,
        )

    def rebuild_cache(self, user_id: str) -> CacheActionResponse:
        logger.info(f"Rebuilding activity cache for user {user_id}")
        try:
            self._rebuild(user_id)
        except Exception as e:
            logger.error(f"Error rebuilding activity cache for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to rebuild cache")
        return CacheActionResponse(success=True, message="Cache rebuilt successfully")

    def warm_cache(self) -> ActivityWarmResponse:
        """Rebuild activity caches for users with friends, capped at ACTIVITY_WARM_LIMIT"""
        try:
            friendships = self.supabase.table("friends").select("user1_id, user2_id").execute()
        except Exception as e:
            logger.error(f"Error fetching friendships: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch users")

        user_ids: Dict[str, None] = {}
        for row in friendships.data or []:
            user_ids[row["user1_id"]] = None
            user_ids[row["user2_id"]] = None

        rebuilt_count = 0
        errors: List[str] = []
        for user_id in list(user_ids)[:ACTIVITY_WARM_LIMIT]:
            try:
                self._rebuild(user_id)
                rebuilt_count += 1
            except Exception as e:
                errors.append(f"User {user_id}: {e}")

        logger.info(f"Activity cache warm: {rebuilt_count}/{len(user_ids)} rebuilt")
        return ActivityWarmResponse(
            success=True,
            rebuilt_count=rebuilt_count,
            total_users=len(user_ids),
            errors=errors or None,
        )


class FriendProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _build(self, target_user_id: str) -> Any:
        result = self.supabase.rpc("build_friend_profile_cache", {"target_user_id": target_user_id}).execute()
        return result.data

    def get_profile(self, target_user_id: str, requesting_user_id: str, force_rebuild: bool = False) -> FriendProfileResponse:
        start = time.monotonic()
        if force_rebuild:
            logger.info(f"Force rebuilding profile cache for {target_user_id}")
            try:
                profile = self._build(target_user_id)
            except Exception as e:
                logger.error(f"Error rebuilding profile cache for {target_user_id}: {e}")
                raise HTTPException(status_code=500, detail="Failed to rebuild profile cache")
            cache_status = "rebuilt"
        else:
            try:
                result = self.supabase.rpc("get_cached_friend_profile", {
                    "target_user_id": target_user_id,
                    "requesting_user_id": requesting_user_id,
                }).execute()
            except Exception as e:
                logger.error(f"Error fetching cached profile for {target_user_id}: {e}")
                raise HTTPException(status_code=500, detail="Failed to fetch profile")
            profile = result.data
            cache_status = "hit"

        load_time_ms = int((time.monotonic() - start) * 1000)
        logger.debug(f"Profile {target_user_id} loaded in {load_time_ms}ms ({cache_status})")
        return FriendProfileResponse(profile=profile, cache_status=cache_status, load_time_ms=load_time_ms)

    def get_profile_stats(self, target_user_id: str) -> FriendProfileStatsResponse:
        """Quick stats for popups and previews"""
        cached = None
        try:
            result = self.supabase.table("friend_profile_cache")\
                .select("profile_data")\
                .eq("user_id", target_user_id)\
                .limit(1)\
                .execute()
            if result.data:
                cached = result.data[0]
        except Exception as e:
            logger.warning(f"Profile cache lookup failed for {target_user_id}: {e}")

        if cached is not None:
            return FriendProfileStatsResponse(
                stats=_stats_from_profile_data(cached.get("profile_data")),
                cache_status="hit",
            )

        try:
            built = self._build(target_user_id)
        except Exception as e:
            logger.error(f"Error building profile cache for {target_user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to build profile cache")
        return FriendProfileStatsResponse(stats=_stats_from_profile_data(built), cache_status="built")

    def build_cache(self, target_user_id: str) -> ProfileCacheBuildResponse:
        logger.info(f"Building profile cache for user {target_user_id}")
        try:
            profile = self._build(target_user_id)
        except Exception as e:
            logger.error(f"Error building profile cache for {target_user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to build profile cache")
        return ProfileCacheBuildResponse(
            success=True,
            message="Profile cache built successfully",
            profile=profile,
        )

    def warm_all_caches(self, sleep=time.sleep) -> int:
        """
        Build profile caches for every active user, PROFILE_WARM_BATCH_SIZE at a time.
        Runs as a background task; failures are logged per user. Returns the number warmed.
        """
        try:
            user_ids = get_active_user_ids(self.supabase)
        except Exception as e:
            logger.error(f"Error fetching active users: {e}")
            return 0

        total = len(user_ids)
        logger.info(f"Warming profile caches for {total} users...")
        warmed = 0
        errors: List[str] = []

        def _warm(user_id: str) -> Optional[str]:
            try:
                self._build(user_id)
                return None
            except Exception as e:
                return f"User {user_id}: {e}"

        with ThreadPoolExecutor(max_workers=PROFILE_WARM_BATCH_SIZE) as pool:
            for i in range(0, total, PROFILE_WARM_BATCH_SIZE):
                batch = user_ids[i:i + PROFILE_WARM_BATCH_SIZE]
                for user_id, error in zip(batch, pool.map(_warm, batch)):
                    if error:
                        errors.append(error)
                        logger.error(f"Failed to warm cache for user {user_id}: {error}")
                    else:
                        warmed += 1
                        logger.debug(f"Warmed cache for user {user_id} ({warmed}/{total})")
                if i + PROFILE_WARM_BATCH_SIZE < total:
                    sleep(PROFILE_WARM_BATCH_DELAY_SEC)

        logger.info(f"Cache warming completed: {warmed}/{total} successful")
        if errors:
            logger.error(f"Cache warming errors: {errors}")
        return warmed
