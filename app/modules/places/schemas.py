from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal


class PlaceSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    location: Optional[str] = None  # "lat,lng"
    radius: int = Field(50000, gt=0, le=50000)
    type: Literal["search", "details", "nearby"] = "search"
    place_id: Optional[str] = Field(None, alias="placeId")


class LocationSuggestionsRequest(BaseModel):
    input: str = ""
    limit: int = Field(5, ge=1, le=20)


class LocationSuggestion(BaseModel):
    id: str
    description: str
    mainText: str
    secondaryText: str = ""


class LocationSuggestionsResponse(BaseModel):
    success: bool = True
    suggestions: List[LocationSuggestion]


class GeocodeRequest(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = None


class GeocodeResponse(BaseModel):
    latitude: float
    longitude: float
