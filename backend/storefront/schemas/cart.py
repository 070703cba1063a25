from typing import List
from datetime import datetime
from pydantic import BaseModel, Field

from storefront.models.cart import Cart


class AddToCartRequest(BaseModel):
    """Schema for adding a product to cart."""
    product_id: str = Field(alias="productId")
    quantity: int = Field(default=1, ge=1)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "productId": "64b7f0c2a1e4c3d2b1a09f88",
                "quantity": 2
            }
        }


class UpdateCartItemRequest(BaseModel):
    """Schema for updating cart item quantity. A quantity of 0 removes the item."""
    quantity: int = Field(ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "quantity": 3
            }
        }


class CartItemResponse(BaseModel):
    """Schema for cart item response."""
    product: str
    quantity: int
    price: float
    added_at: datetime


class CartResponse(BaseModel):
    """Schema for cart response."""
    user: str
    items: List[CartItemResponse]
    total: float
    item_count: int
    updated_at: datetime

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartResponse":
        return cls(
            user=cart.user,
            items=[
                CartItemResponse(
                    product=item.product,
                    quantity=item.quantity,
                    price=item.price,
                    added_at=item.added_at
                )
                for item in cart.items
            ],
            total=cart.total,
            item_count=cart.item_count,
            updated_at=cart.updated_at
        )
