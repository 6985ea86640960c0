from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class FriendActivityPage(BaseModel):
    activities: List[Dict[str, Any]]
    cache_status: str  # hit | rebuilt
    page: int
    page_size: int
    has_more: bool


class CacheActionResponse(BaseModel):
    success: bool = True
    message: str


class ActivityWarmResponse(BaseModel):
    success: bool = True
    rebuilt_count: int
    total_users: int
    errors: Optional[List[str]] = None


class FriendProfileResponse(BaseModel):
    profile: Optional[Any] = None
    cache_status: str  # hit | rebuilt
    load_time_ms: int


class FriendProfileStats(BaseModel):
    ratedCount: int = 0
    wishlistCount: int = 0
    averageRating: float = 0
    topCuisine: str = ""
    username: str = "Unknown User"


class FriendProfileStatsResponse(BaseModel):
    stats: FriendProfileStats
    cache_status: str  # hit | built


class ProfileCacheBuildResponse(BaseModel):
    success: bool = True
    message: str
    profile: Optional[Any] = None


class CacheWarmSummary(BaseModel):
    total_users: int
    profile_caches_built: int
    activity_caches_built: int
    errors: Optional[List[str]] = None
    success_rate: str


class CacheWarmResponse(BaseModel):
    success: bool = True
    message: str
    summary: CacheWarmSummary
