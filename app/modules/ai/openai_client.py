from typing import Optional

from openai import OpenAI

from app.config import settings
from app.core.http_client import require_key


class OpenAIClient:
    _client: Optional[OpenAI] = None

    @classmethod
    def get_client(cls) -> OpenAI:
        if cls._client is None:
            cls._client = OpenAI(
                api_key=require_key(settings.openai_api_key, "OpenAI API key"),
                timeout=60.0,
            )
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_openai() -> OpenAI:
    return OpenAIClient.get_client()
