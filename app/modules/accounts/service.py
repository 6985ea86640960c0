import logging
from typing import Optional

import httpx
from fastapi import HTTPException
from supabase import Client

from app.modules.accounts.models import USER_DATA_TABLES, MAPBOX_TOKEN_KEY
from app.modules.accounts.schemas import (
    AccountDeletionResponse, MapboxTokenSaved, MapboxTokenResponse
)
from app.modules.places.mapbox_client import MapboxClient

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, supabase: Client):
        """supabase must be the service-role client: deletions span other users' friendship rows"""
        self.supabase = supabase

    def delete_account(self, user_id: str) -> AccountDeletionResponse:
        """Remove every row owned by the user, then the auth user itself"""
        logger.info(f"Deleting account for user: {user_id}")
        for table, column_or_filter in USER_DATA_TABLES:
            try:
                query = self.supabase.table(table).delete()
                if "{user_id}" in column_or_filter:
                    query = query.or_(column_or_filter.format(user_id=user_id))
                else:
                    query = query.eq(column_or_filter, user_id)
                query.execute()
            except Exception as e:
                # Keep going: the auth user must still be removed
                logger.error(f"Error deleting {table} rows for {user_id}: {e}")

        try:
            self.supabase.auth.admin.delete_user(user_id)
        except Exception as e:
            logger.error(f"Error deleting auth user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete account: {e}")

        logger.info(f"Successfully deleted user account: {user_id}")
        return AccountDeletionResponse(success=True, message="Account deleted successfully")


class MapboxTokenService:
    def __init__(self, supabase: Client, default_token: Optional[str] = None, mapbox_factory=MapboxClient):
        self.supabase = supabase
        self.default_token = default_token
        self.mapbox_factory = mapbox_factory

    def _validate(self, token: str):
        try:
            valid = self.mapbox_factory(token).is_token_valid()
        except httpx.HTTPError as e:
            logger.warning(f"Could not reach Mapbox to validate token: {e}")
            raise HTTPException(status_code=400, detail="Could not validate Mapbox token")
        if not valid:
            raise HTTPException(status_code=400, detail="Invalid Mapbox token")

    def save_token(self, user_id: str, token: Optional[str]) -> MapboxTokenSaved:
        if not token or not token.strip():
            raise HTTPException(status_code=400, detail="Token is required")
        token = token.strip()
        self._validate(token)

        try:
            updated = self.supabase.table("settings")\
                .update({"value": token})\
                .eq("key", MAPBOX_TOKEN_KEY)\
                .eq("user_id", user_id)\
                .execute()
            if not updated.data:
                self.supabase.table("settings").insert({
                    "key": MAPBOX_TOKEN_KEY,
                    "value": token,
                    "user_id": user_id,
                }).execute()
        except Exception as e:
            logger.error(f"Error saving Mapbox token for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Error saving token: {e}")
        return MapboxTokenSaved(success=True)

    def get_token(self, user_id: str) -> MapboxTokenResponse:
        result = self.supabase.table("settings")\
            .select("value")\
            .eq("key", MAPBOX_TOKEN_KEY)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if result.data and result.data[0].get("value"):
            return MapboxTokenResponse(token=result.data[0]["value"], source="user")
        if self.default_token:
            return MapboxTokenResponse(token=self.default_token, source="default")
        raise HTTPException(status_code=404, detail="Mapbox token not configured")
