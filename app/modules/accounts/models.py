# Supabase tables touched by account operations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
User-owned rows removed on account deletion (service role, RLS bypassed):
- profiles: id = user
- restaurants: user_id = user
- friends: user1_id = user OR user2_id = user
- friend_requests: sender_id = user OR receiver_id = user
- reservations: user_id = user
- settings: user_id = user

settings:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id)
- key: text - e.g. 'mapbox_token'
- value: text
"""

# (table, filter) pairs in deletion order; filter is a PostgREST or() expression template or a column name
USER_DATA_TABLES = [
    ("profiles", "id"),
    ("restaurants", "user_id"),
    ("friends", "user1_id.eq.{user_id},user2_id.eq.{user_id}"),
    ("friend_requests", "sender_id.eq.{user_id},receiver_id.eq.{user_id}"),
    ("reservations", "user_id"),
    ("settings", "user_id"),
]

MAPBOX_TOKEN_KEY = "mapbox_token"
