import httpx

from app.config import settings
from app.core.http_client import get_http_client, require_key

YELP_BASE_URL = "https://api.yelp.com/v3"


class YelpClient:
    def __init__(self, http: httpx.Client = None, api_key: str = None):
        self.http = http or get_http_client()
        self.api_key = api_key or require_key(settings.yelp_api_key, "Yelp API key")

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}", "Accept": "application/json"}

    def search(self, params: dict) -> httpx.Response:
        return self.http.get(f"{YELP_BASE_URL}/businesses/search", params=params, headers=self.headers)

    def business(self, business_id: str) -> httpx.Response:
        return self.http.get(f"{YELP_BASE_URL}/businesses/{business_id}", headers=self.headers)

    def reviews(self, business_id: str, limit: int = 20) -> httpx.Response:
        return self.http.get(
            f"{YELP_BASE_URL}/businesses/{business_id}/reviews",
            params={"limit": limit, "sort_by": "date_desc"},
            headers=self.headers,
        )


def get_yelp_client() -> YelpClient:
    return YelpClient()
