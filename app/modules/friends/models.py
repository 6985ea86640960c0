# Supabase tables and RPCs used by the friend caches
# This file documents the expected database objects
# Actual operations are handled via Supabase SDK in service.py and cache_warmer.py

"""
Expected Supabase tables:

friends:
- user1_id: uuid (references profiles.id)
- user2_id: uuid (references profiles.id)

profiles:
- id: uuid (primary key, references auth.users.id)
- username: text

restaurants:
- user_id: uuid (owner; rows owned by the system user are cached Google places)

friend_profile_cache:
- user_id: uuid (primary key)
- profile_data: jsonb - {"profile": {...}, "stats": {"total_rated", "total_wishlist", "avg_rating", "top_cuisine"}, ...}

Expected RPCs (SQL functions, maintained with the database schema):
- get_cached_friend_activity(requesting_user_id uuid, page_size int, page_offset int) -> setof activity rows
- rebuild_friend_activity_cache(target_user_id uuid) -> void
- get_cached_friend_profile(target_user_id uuid, requesting_user_id uuid) -> jsonb
- build_friend_profile_cache(target_user_id uuid) -> jsonb (same shape as profile_data)
"""
