from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Schema for creating a product."""
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category: str
    image_url: str = Field(alias="imageUrl")
    images: List[str] = []

    class Config:
        populate_by_name = True


class ProductUpdate(BaseModel):
    """Schema for updating a product."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    images: Optional[List[str]] = None

    class Config:
        populate_by_name = True


class ProductResponse(BaseModel):
    """Schema for product response, using the storefront's wire names."""
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    price: float
    stock: int
    category: str
    image_url: str = Field(alias="imageUrl")
    images: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
        from_attributes = True

    @classmethod
    def from_document(cls, product: dict) -> "ProductResponse":
        return cls(
            id=str(product["_id"]),
            name=product["name"],
            description=product.get("description", ""),
            price=product["price"],
            stock=product["stock"],
            category=product["category"],
            image_url=product["imageUrl"],
            images=product.get("images", []),
            created_at=product.get("created_at"),
            updated_at=product.get("updated_at", product.get("created_at"))
        )
