"""
Shared httpx client for third-party APIs (Google Places, Mapbox, Yelp, TripAdvisor).
"""
import logging
from typing import Optional

import httpx
from fastapi import HTTPException

from app.config import settings

logger = logging.getLogger(__name__)


class HttpClient:
    _client: Optional[httpx.Client] = None

    @classmethod
    def get_client(cls) -> httpx.Client:
        if cls._client is None:
            cls._client = httpx.Client(
                timeout=settings.upstream_timeout_seconds,
                follow_redirects=True,
            )
        return cls._client

    @classmethod
    def set_client(cls, client: httpx.Client):
        """Swap the shared client (tests pass one built on httpx.MockTransport)."""
        cls._client = client

    @classmethod
    def close(cls):
        if cls._client is not None:
            cls._client.close()
            cls._client = None


def get_http_client() -> httpx.Client:
    return HttpClient.get_client()


def require_key(value: Optional[str], name: str) -> str:
    """Return a configured API key or fail the request with a 500."""
    if not value:
        logger.error(f"{name} not configured")
        raise HTTPException(status_code=500, detail=f"{name} not configured")
    return value
