from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for account deletion, cache warming, place caching

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_chat_model: str = "gpt-4o-mini"
    openai_image_model: str = "gpt-image-1"

    # Maps and listings providers
    google_places_api_key: Optional[str] = None
    mapbox_token: Optional[str] = None
    yelp_api_key: Optional[str] = None
    tripadvisor_api_key: Optional[str] = None
    upstream_timeout_seconds: float = 10.0

    # Resend
    resend_api_key: Optional[str] = None
    email_from_address: str = "onboarding@resend.dev"

    # Cache warming
    cache_warmer_interval_seconds: int = 0  # 0 disables the periodic loop
    cache_warmer_secret: Optional[str] = None

    # App
    app_name: str = "resto-radar-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173,capacitor://localhost"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
