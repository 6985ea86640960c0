# Supabase table: restaurants (place cache rows)
# This file documents the columns written when Google place details are cached
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure (subset used here):
- google_place_id: text (unique) - upsert conflict target
- name: text
- address: text
- city: text (second-to-last comma-separated part of the formatted address)
- country: text (last comma-separated part of the formatted address)
- cuisine: text (first specific Google type, default 'restaurant')
- rating: numeric (nullable)
- phone_number: text (nullable)
- website: text (nullable)
- opening_hours: text (nullable) - weekday_text joined by newlines
- price_range: int (nullable) - Google price_level
- latitude, longitude: numeric
- photos: text[] - photo proxy URLs (never carry the Google API key)
- user_id: uuid - SYSTEM_USER_ID for cached places
- is_wishlist: bool (false)
- notes: text
"""

SYSTEM_USER_ID = "00000000-0000-0000-0000-000000000000"
