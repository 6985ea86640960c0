from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class ReviewSummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_id: str = Field(..., min_length=1, alias="placeId")
    restaurant_name: str = Field("", alias="restaurantName")


class ReviewSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    summary: str
    highlights: List[str] = []
    concerns: List[str] = []
    sentiment: str = "neutral"
    foodQuality: Optional[str] = None
    serviceQuality: Optional[str] = None
    atmosphere: Optional[str] = None
    valueForMoney: Optional[str] = None
    recommendedDishes: Optional[List[str]] = None
    bestFor: Optional[List[str]] = None


class CuisineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_name: str = Field(..., min_length=1, alias="restaurantName")
    address: Optional[str] = None
    types: Optional[List[str]] = None


class CuisineResponse(BaseModel):
    cuisine: str
    restaurantName: str


class MichelinRequest(BaseModel):
    name: str = Field(..., min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    cuisine: Optional[str] = None
    notes: Optional[str] = None


class MichelinResponse(BaseModel):
    michelinStars: int


class SearchCompletionRequest(BaseModel):
    query: str = ""
    location: str = "New York"


class SearchCompletionResponse(BaseModel):
    success: bool = True
    suggestions: List[str]
    fallback: Optional[bool] = None


class PhotoGenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_name: Optional[str] = Field(None, alias="restaurantName")
    cuisine: Optional[str] = None


class GeneratedPhoto(BaseModel):
    url: str
    type: str  # atmosphere | food
    description: str


class PhotoGenerationResponse(BaseModel):
    success: bool = True
    images: List[GeneratedPhoto]
