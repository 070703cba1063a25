from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Schema for posting a review."""
    rating: int = Field(ge=1, le=5)
    comment: str = Field(default="", max_length=2000)

    class Config:
        json_schema_extra = {
            "example": {
                "rating": 5,
                "comment": "Exactly as pictured."
            }
        }


class ReviewResponse(BaseModel):
    """Schema for review response."""
    id: str
    product: str
    user: str
    user_name: str
    rating: int
    comment: str
    created_at: datetime


class ReviewListResponse(BaseModel):
    """Reviews for one product with their average rating."""
    reviews: List[ReviewResponse]
    average_rating: Optional[float] = None
    count: int
