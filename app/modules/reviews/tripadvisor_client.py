import httpx

from app.config import settings
from app.core.http_client import get_http_client, require_key

TRIPADVISOR_BASE_URL = "https://api.content.tripadvisor.com/api/v1"


class TripAdvisorClient:
    def __init__(self, http: httpx.Client = None, api_key: str = None):
        self.http = http or get_http_client()
        self.api_key = api_key or require_key(settings.tripadvisor_api_key, "TripAdvisor API key")

    def get(self, path: str, params: dict) -> httpx.Response:
        return self.http.get(
            f"{TRIPADVISOR_BASE_URL}/{path}",
            params={"key": self.api_key, **params},
            headers={"Accept": "application/json", "X-TripAdvisor-API-Key": self.api_key},
        )


def get_tripadvisor_client() -> TripAdvisorClient:
    return TripAdvisorClient()
