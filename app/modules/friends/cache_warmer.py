import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List

from fastapi import HTTPException
from supabase import Client

from app.config import settings
from app.modules.friends.schemas import CacheWarmSummary
from app.modules.friends.service import get_active_user_ids

logger = logging.getLogger(__name__)

WARM_BATCH_SIZE = 5
WARM_BATCH_DELAY_SEC = 0.2
MAX_REPORTED_ERRORS = 10
# Ids per profiles query; keeps the in.(...) filter well under URL length limits
PROFILE_LOOKUP_CHUNK_SIZE = 100


def _load_active_profiles(supabase: Client) -> List[dict]:
    user_ids = get_active_user_ids(supabase)
    if not user_ids:
        return []
    profiles = []
    for i in range(0, len(user_ids), PROFILE_LOOKUP_CHUNK_SIZE):
        result = supabase.table("profiles")\
            .select("id, username")\
            .in_("id", user_ids[i:i + PROFILE_LOOKUP_CHUNK_SIZE])\
            .execute()
        profiles.extend(result.data or [])
    return profiles


def warm_all(supabase: Client, sleep=time.sleep) -> CacheWarmSummary:
    """Build profile and activity caches for every active user. Use with the service-role client."""
    logger.info("Starting comprehensive cache warming...")
    try:
        users = _load_active_profiles(supabase)
    except Exception as e:
        logger.error(f"Error fetching active users: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch users")
    total = len(users)
    logger.info(f"Found {total} users to warm caches for")

    profile_count = 0
    activity_count = 0
    errors: List[str] = []

    def _warm(user: dict) -> tuple:
        name = user.get("username") or user["id"]
        user_errors = []
        profile_ok = activity_ok = False
        try:
            supabase.rpc("build_friend_profile_cache", {"target_user_id": user["id"]}).execute()
            profile_ok = True
        except Exception as e:
            user_errors.append(f"Profile cache for {name}: {e}")
        try:
            supabase.rpc("rebuild_friend_activity_cache", {"target_user_id": user["id"]}).execute()
            activity_ok = True
        except Exception as e:
            user_errors.append(f"Activity cache for {name}: {e}")
        return profile_ok, activity_ok, user_errors

    with ThreadPoolExecutor(max_workers=WARM_BATCH_SIZE) as pool:
        for i in range(0, total, WARM_BATCH_SIZE):
            batch = users[i:i + WARM_BATCH_SIZE]
            for profile_ok, activity_ok, user_errors in pool.map(_warm, batch):
                profile_count += profile_ok
                activity_count += activity_ok
                errors.extend(user_errors)
            logger.debug(f"Warmed caches for {min(i + WARM_BATCH_SIZE, total)}/{total} users")
            if i + WARM_BATCH_SIZE < total:
                sleep(WARM_BATCH_DELAY_SEC)

    if total:
        success_rate = f"{(profile_count + activity_count) / (total * 2) * 100:.1f}%"
    else:
        success_rate = "0%"

    summary = CacheWarmSummary(
        total_users=total,
        profile_caches_built=profile_count,
        activity_caches_built=activity_count,
        errors=errors[:MAX_REPORTED_ERRORS] or None,
        success_rate=success_rate,
    )
    logger.info(f"Cache warming completed: {summary.model_dump()}")
    return summary


async def cache_warmer_loop():
    """Background task that periodically warms every friend cache"""
    from app.database.supabase_client import SupabaseClient

    interval = settings.cache_warmer_interval_seconds
    while True:
        try:
            await asyncio.to_thread(warm_all, SupabaseClient.get_service_client())
        except Exception as e:
            logger.error(f"Error in cache warmer loop: {str(e)}")

        await asyncio.sleep(interval)
