# pinify/schemas/place.py
from enum import Enum
from pydantic import BaseModel, Field, conint
from typing import List, Optional
from datetime import datetime

from pinify.schemas.review import ReviewResponse


class PlaceCategory(str, Enum):
    food = "Food"
    dessert = "Dessert"
    shisha = "Shisha"
    historical = "Historical"
    coffee = "Coffee"
    view = "View"
    mall = "Mall"


class Location(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


# Add-place form: the place itself plus the submitter's own review
class PlaceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    city: str = ""
    district: str = ""
    categories: List[PlaceCategory] = []
    location: Location
    google_place_id: Optional[str] = None
    rating: conint(ge=1, le=5) = Field(5, description="Rating 1-5")
    comment: str = ""


class PlaceResponse(BaseModel):
    id: int
    owner_id: Optional[int]
    name: str
    city: str
    district: str
    categories: List[PlaceCategory]
    google_place_id: Optional[str] = None
    latitude: float
    longitude: float
    avg_rating: float
    rating_count: int
    created_at: datetime

    class Config:
        from_attributes = True


class PlaceDetailResponse(PlaceResponse):
    reviews: List[ReviewResponse] = []


class AddPlaceResponse(BaseModel):
    place: PlaceResponse
    created: bool


class ProfilePlaceResponse(PlaceResponse):
    user_rating: Optional[int] = None
    added_at: Optional[datetime] = None
