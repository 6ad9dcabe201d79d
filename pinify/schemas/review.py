# pinify/schemas/review.py
from pydantic import BaseModel, Field, conint
from typing import Optional
from datetime import datetime


class ReviewCreate(BaseModel):
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    comment: str = ""


class ReviewUpdate(BaseModel):
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    comment: str = ""


class ReviewResponse(BaseModel):
    id: int
    place_id: int
    user_id: int
    username: str
    rating: int
    comment: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
