from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class Product(BaseModel):
    """Product model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    description: str = ""
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category: str
    image_url: str = Field(alias="imageUrl")
    images: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Ceramic Mug",
                "description": "Hand-glazed stoneware mug, 350ml",
                "price": 9.99,
                "stock": 5,
                "category": "kitchen",
                "imageUrl": "https://example.com/mug.jpg",
                "images": ["https://example.com/mug-side.jpg"]
            }
        }
