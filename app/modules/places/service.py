import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException
from supabase import Client

from app.modules.places.google_client import GooglePlacesClient
from app.modules.places.mapbox_client import MapboxClient
from app.modules.places.models import SYSTEM_USER_ID
from app.modules.places.schemas import (
    PlaceSearchRequest, LocationSuggestion, LocationSuggestionsResponse, GeocodeResponse
)

logger = logging.getLogger(__name__)

DETAILS_FIELDS = ",".join([
    "place_id", "name", "formatted_address", "formatted_phone_number", "website",
    "rating", "user_ratings_total", "price_level", "opening_hours", "photos",
    "geometry", "types", "reviews", "reservable",
])
GENERIC_PLACE_TYPES = {"establishment", "point_of_interest", "food"}
PHOTO_PROXY_PATH = "/api/v1/places/photo"
PHOTO_CACHE_CONTROL = "public, max-age=86400, s-maxage=86400, stale-while-revalidate=604800"
MIN_SUGGESTION_INPUT = 2


def photo_proxy_url(photo_reference: str, maxwidth: int = 400) -> str:
    return f"{PHOTO_PROXY_PATH}?{urlencode({'photoreference': photo_reference, 'maxwidth': maxwidth})}"


def place_to_cache_row(place: Dict[str, Any]) -> Dict[str, Any]:
    """Map a Google place details result onto a restaurants row"""
    address = place.get("formatted_address") or ""
    parts = [p.strip() for p in address.split(",")]
    city = parts[-2] if len(parts) >= 2 else ""
    country = parts[-1] if parts else ""
    specific_types = [t for t in place.get("types", []) if t not in GENERIC_PLACE_TYPES]
    location = (place.get("geometry") or {}).get("location") or {}
    weekday_text = (place.get("opening_hours") or {}).get("weekday_text")
    return {
        "google_place_id": place["place_id"],
        "name": place.get("name"),
        "address": address,
        "city": city,
        "country": country,
        "cuisine": specific_types[0] if specific_types else "restaurant",
        "rating": place.get("rating"),
        "phone_number": place.get("formatted_phone_number"),
        "website": place.get("website"),
        "opening_hours": "\n".join(weekday_text) if weekday_text else None,
        "price_range": place.get("price_level"),
        "latitude": location.get("lat"),
        "longitude": location.get("lng"),
        "photos": [photo_proxy_url(p["photo_reference"]) for p in (place.get("photos") or [])[:3]],
        "user_id": SYSTEM_USER_ID,
        "is_wishlist": False,
        "notes": "Cached from Google Places API",
    }


def cache_place_details(supabase: Client, place: Dict[str, Any]):
    """Upsert a details result into restaurants. Runs after the response; never raises."""
    try:
        supabase.table("restaurants")\
            .upsert(place_to_cache_row(place), on_conflict="google_place_id")\
            .execute()
        logger.info(f"Cached place {place.get('place_id')}")
    except Exception as e:
        logger.error(f"Caching error (non-blocking): {e}")


class PlacesService:
    def __init__(self, google: GooglePlacesClient):
        self.google = google

    def search(self, request: PlaceSearchRequest) -> Dict[str, Any]:
        """Text search, place details or nearby search; returns Google's payload unchanged"""
        if request.type == "search":
            if not request.query:
                raise HTTPException(status_code=400, detail="Query required for search request")
            params = {"query": request.query}
            if request.location:
                params["location"] = request.location
                params["radius"] = str(request.radius)
                params["locationbias"] = f"circle:{request.radius}@{request.location}"
            return self.google.get_json("textsearch", params)

        if request.type == "details":
            if not request.place_id:
                raise HTTPException(status_code=400, detail="Place ID required for details request")
            return self.google.get_json("details", {
                "place_id": request.place_id,
                "fields": DETAILS_FIELDS,
                "reviews_sort": "newest",
            })

        if not request.location:
            raise HTTPException(status_code=400, detail="Location required for nearby search")
        return self.google.get_json("nearbysearch", {
            "location": request.location,
            "radius": str(request.radius),
        })

    def location_suggestions(self, text: str, limit: int = 5) -> LocationSuggestionsResponse:
        """City autocomplete; short inputs return nothing without calling Google"""
        if not text or len(text.strip()) < MIN_SUGGESTION_INPUT:
            return LocationSuggestionsResponse(success=True, suggestions=[])

        data = self.google.get_json("autocomplete", {"input": text, "types": "(cities)"})
        suggestions: List[LocationSuggestion] = []
        for prediction in (data.get("predictions") or [])[:limit]:
            formatting = prediction.get("structured_formatting") or {}
            suggestions.append(LocationSuggestion(
                id=prediction["place_id"],
                description=prediction["description"],
                mainText=formatting.get("main_text") or prediction["description"],
                secondaryText=formatting.get("secondary_text") or "",
            ))
        logger.info(f"Found {len(suggestions)} location suggestions for '{text}'")
        return LocationSuggestionsResponse(success=True, suggestions=suggestions)

    def photo(self, photo_reference: Optional[str], maxwidth: str = "400", maxheight: Optional[str] = None):
        """Returns (content, content_type) of a Google place photo"""
        if not photo_reference:
            raise HTTPException(status_code=400, detail="Missing photoreference parameter")
        try:
            upstream = self.google.get_photo(photo_reference, maxwidth=maxwidth, maxheight=maxheight)
        except httpx.HTTPError as e:
            logger.error(f"Photo proxy error: {e}")
            raise HTTPException(status_code=502, detail="Internal error")
        if not upstream.is_success:
            raise HTTPException(status_code=upstream.status_code, detail=f"Upstream error: {upstream.text}")
        return upstream.content, upstream.headers.get("content-type") or "image/jpeg"


class GeocodingService:
    def __init__(self, mapbox: MapboxClient):
        self.mapbox = mapbox

    def geocode(self, address: Optional[str], city: Optional[str]) -> GeocodeResponse:
        if not address or not city:
            raise HTTPException(status_code=400, detail="Address and city are required")
        search_address = f"{address}, {city}"
        logger.info(f"Geocoding address: {search_address}")
        try:
            coordinates = self.mapbox.first_coordinates(search_address)
        except httpx.HTTPError as e:
            logger.error(f"Mapbox geocoding request failed: {e}")
            raise HTTPException(status_code=502, detail="Mapbox API unreachable")
        if coordinates is None:
            raise HTTPException(status_code=404, detail="Location not found")
        return GeocodeResponse(**coordinates)
