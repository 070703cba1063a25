from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Review(BaseModel):
    """Product review model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    product: str
    user: str
    user_name: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
