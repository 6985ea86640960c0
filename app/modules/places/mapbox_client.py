import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from app.core.http_client import get_http_client

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"


class MapboxClient:
    def __init__(self, token: str, http: httpx.Client = None):
        self.token = token
        self.http = http or get_http_client()

    def forward_geocode(self, search_text: str) -> httpx.Response:
        return self.http.get(
            f"{GEOCODING_URL}/{quote(search_text, safe='')}.json",
            params={"access_token": self.token},
        )

    def first_coordinates(self, search_text: str) -> Optional[Dict[str, Any]]:
        """Return {"latitude", "longitude"} of the best match, or None when nothing matches."""
        data = self.forward_geocode(search_text).json()
        features = data.get("features") or []
        if not features:
            return None
        longitude, latitude = features[0]["center"][:2]
        return {"latitude": latitude, "longitude": longitude}

    def is_token_valid(self) -> bool:
        """Raises httpx.HTTPError when Mapbox cannot be reached."""
        return self.forward_geocode("New York").is_success
