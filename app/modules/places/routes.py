from fastapi import APIRouter, BackgroundTasks, Depends, Response
from app.config import settings
from app.core.dependencies import get_current_user
from app.core.http_client import require_key
from app.database.supabase_client import get_service_supabase
from app.modules.places.google_client import GooglePlacesClient, get_google_places_client
from app.modules.places.mapbox_client import MapboxClient
from app.modules.places.schemas import (
    PlaceSearchRequest, LocationSuggestionsRequest, LocationSuggestionsResponse,
    GeocodeRequest, GeocodeResponse
)
from app.modules.places.service import (
    PlacesService, GeocodingService, cache_place_details, PHOTO_CACHE_CONTROL
)
from supabase import Client
from typing import Any, Dict, Optional

router = APIRouter(prefix="/places", tags=["places"])


def get_places_service(google: GooglePlacesClient = Depends(get_google_places_client)) -> PlacesService:
    return PlacesService(google)


def get_geocoding_service() -> GeocodingService:
    return GeocodingService(MapboxClient(require_key(settings.mapbox_token, "Mapbox token")))


@router.post("/search")
async def search_places(
    request: PlaceSearchRequest,
    background_tasks: BackgroundTasks,
    current_user: Dict = Depends(get_current_user),
    service: PlacesService = Depends(get_places_service),
    supabase: Client = Depends(get_service_supabase)
) -> Dict[str, Any]:
    """Google Places text search, details or nearby search"""
    data = service.search(request)
    if request.type == "details" and data.get("result"):
        background_tasks.add_task(cache_place_details, supabase, data["result"])
    return data


@router.post("/suggestions", response_model=LocationSuggestionsResponse)
async def location_suggestions(
    request: LocationSuggestionsRequest,
    current_user: Dict = Depends(get_current_user),
    service: PlacesService = Depends(get_places_service)
):
    """City autocomplete for location pickers"""
    return service.location_suggestions(request.input, request.limit)


@router.get("/photo")
async def place_photo(
    photoreference: Optional[str] = None,
    photo_reference: Optional[str] = None,
    ref: Optional[str] = None,
    maxwidth: str = "400",
    maxheight: Optional[str] = None,
    service: PlacesService = Depends(get_places_service)
):
    """Google place photo proxy. Public: used directly as an <img> src."""
    content, content_type = service.photo(
        photoreference or photo_reference or ref, maxwidth=maxwidth, maxheight=maxheight
    )
    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": PHOTO_CACHE_CONTROL},
    )


@router.post("/geocode", response_model=GeocodeResponse)
async def geocode(
    request: GeocodeRequest,
    current_user: Dict = Depends(get_current_user),
    service: GeocodingService = Depends(get_geocoding_service)
):
    return service.geocode(request.address, request.city)
