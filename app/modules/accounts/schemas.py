from pydantic import BaseModel
from typing import Optional


class AccountDeletionResponse(BaseModel):
    success: bool = True
    message: str


class MapboxTokenUpdate(BaseModel):
    token: Optional[str] = None


class MapboxTokenSaved(BaseModel):
    success: bool = True


class MapboxTokenResponse(BaseModel):
    token: str
    source: str  # user | default
