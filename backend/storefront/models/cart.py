from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """One product in a cart, with the unit price captured when it was added."""
    product: str
    quantity: int = Field(default=1, ge=1)
    price: float = Field(ge=0)
    added_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        validate_assignment = True


class Cart(BaseModel):
    """Shopping cart model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    user: str
    items: List[CartItem] = Field(default_factory=list)
    total: float = 0.0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        validate_assignment = True
        json_schema_extra = {
            "example": {
                "user": "64b7f0c2a1e4c3d2b1a09f87",
                "items": [
                    {
                        "product": "64b7f0c2a1e4c3d2b1a09f88",
                        "quantity": 3,
                        "price": 9.99,
                        "added_at": "2024-01-01T00:00:00"
                    }
                ],
                "total": 29.97,
                "created_at": "2024-01-01T00:00:00",
                "updated_at": "2024-01-01T00:00:00"
            }
        }

    @classmethod
    def from_document(cls, document: dict) -> "Cart":
        """Build a cart from a raw ``carts`` document."""
        data = dict(document)
        if "_id" in data:
            data["_id"] = str(data["_id"])
        return cls(**data)

    def to_document(self) -> dict:
        """Document form written to the ``carts`` collection (without ``_id``)."""
        return self.model_dump(exclude={"id"})

    def find_item(self, product_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.product == product_id:
                return item
        return None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


def to_cents(amount: float) -> int:
    """Convert a price to integer cents, rounding half up."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def derive_totals(cart: Cart, now: Optional[datetime] = None) -> Cart:
    """
    Return a copy of ``cart`` with its derived fields brought up to date.

    ``total`` becomes the sum of price * quantity over all items, computed in
    integer cents. ``updated_at`` is refreshed to ``now`` but never moves
    backwards. The input cart is left untouched.
    """
    now = now or datetime.utcnow()
    total_cents = sum(to_cents(item.price) * item.quantity for item in cart.items)

    return cart.model_copy(
        update={
            "total": total_cents / 100,
            "updated_at": max(cart.updated_at, now),
        },
        deep=True,
    )
