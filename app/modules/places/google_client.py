import logging
from typing import Any, Dict

import httpx
from fastapi import HTTPException

from app.config import settings
from app.core.http_client import get_http_client, require_key

logger = logging.getLogger(__name__)

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
OK_STATUSES = ("OK", "ZERO_RESULTS")


class GooglePlacesClient:
    """Thin wrapper over the Google Places web service; the API key never leaves the server."""

    def __init__(self, http: httpx.Client = None, api_key: str = None):
        self.http = http or get_http_client()
        self.api_key = api_key or require_key(settings.google_places_api_key, "Google Places API key")

    def get_json(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET <endpoint>/json and validate Google's status field."""
        url = f"{PLACES_BASE_URL}/{endpoint}/json"
        try:
            response = self.http.get(url, params={**params, "key": self.api_key})
        except httpx.TimeoutException:
            logger.error(f"Google Places request to {endpoint} timed out")
            raise HTTPException(status_code=408, detail="Request timeout")
        except httpx.HTTPError as e:
            logger.error(f"Google Places request to {endpoint} failed: {e}")
            raise HTTPException(status_code=502, detail="Google Places API unreachable")

        if response.status_code >= 400:
            logger.error(f"Google Places HTTP error {response.status_code} for {endpoint}")
            raise HTTPException(status_code=502, detail=f"HTTP error! status: {response.status_code}")

        data = response.json()
        status = data.get("status")
        if status not in OK_STATUSES:
            message = data.get("error_message") or "Unknown error"
            logger.error(f"Google Places API error: {status} - {message}")
            raise HTTPException(status_code=502, detail=f"Google Places API error: {status} - {message}")
        return data

    def get_photo(self, photo_reference: str, maxwidth: str = "400", maxheight: str = None) -> httpx.Response:
        params = {"photoreference": photo_reference, "key": self.api_key}
        if maxheight:
            params["maxheight"] = maxheight
        else:
            params["maxwidth"] = maxwidth
        return self.http.get(f"{PLACES_BASE_URL}/photo", params=params)


def get_google_places_client() -> GooglePlacesClient:
    return GooglePlacesClient()
