from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any


class YelpReviewsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_name: str = Field(..., min_length=1, alias="restaurantName")
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class YelpDebugInfo(BaseModel):
    searchResults: int
    selectedBusiness: str
    businessResponseOk: bool
    reviewsResponseOk: bool


class YelpReviewsResponse(BaseModel):
    business: Optional[Dict[str, Any]] = None
    reviews: List[Dict[str, Any]] = []
    message: Optional[str] = None
    debug: Optional[YelpDebugInfo] = None


class TripAdvisorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: str
    query: Optional[str] = None
    location_id: Optional[str] = Field(None, alias="locationId")
    limit: int = Field(10, ge=1, le=50)
    check_in: Optional[str] = Field(None, alias="checkIn")
    check_out: Optional[str] = Field(None, alias="checkOut")
    guests: int = Field(2, ge=1)
