"""
Core dependencies for authentication and per-request Supabase clients
"""

from fastapi import Depends, Header, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import SupabaseClient, get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional
import hmac
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Resolve the caller from the bearer token"""
    return auth_service.get_current_user(token)


def get_user_supabase(
    token: str = Depends(get_current_token),
    current_user: dict = Depends(get_current_user)
) -> Client:
    """Supabase client acting as the caller (RLS applies). Depends on get_current_user so the token is validated first."""
    return SupabaseClient.get_user_client(token)


def verify_cache_warmer_secret(
    x_cache_warmer_secret: Optional[str] = Header(None)
) -> None:
    """Guard for scheduler-triggered endpoints. Open when no secret is configured."""
    expected = settings.cache_warmer_secret
    if not expected:
        return None
    if not x_cache_warmer_secret or not hmac.compare_digest(x_cache_warmer_secret, expected):
        logger.warning("Rejected cache warmer call with missing or wrong secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid cache warmer secret"
        )
    return None
