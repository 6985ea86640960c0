# No Supabase tables: Yelp and TripAdvisor responses are proxied, not stored.

"""
Upstream APIs:
- Yelp Fusion v3: /businesses/search, /businesses/{id}, /businesses/{id}/reviews (Bearer key)
- TripAdvisor Content API v1: /location/search, /location/{id}/{details,photos,reviews,nearby_search,offers}
  (key passed as query parameter and X-TripAdvisor-API-Key header)
"""
