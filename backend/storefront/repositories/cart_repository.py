"""
Persistence boundary for carts.

Every write of a cart goes through ``CartRepository.save``, which runs
``derive_totals`` before the document reaches MongoDB.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from storefront.models.cart import Cart, derive_totals

logger = logging.getLogger(__name__)


class CartRepository:
    """Reads and writes documents in the ``carts`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.carts

    async def get_by_user(self, user_id: str) -> Optional[Cart]:
        document = await self.collection.find_one({"user": user_id})
        if document is None:
            return None
        return Cart.from_document(document)

    async def save(self, cart: Cart) -> Cart:
        """Recompute derived fields and replace the user's cart document."""
        cart = derive_totals(cart)
        await self.collection.replace_one(
            {"user": cart.user},
            cart.to_document(),
            upsert=True
        )
        logger.info(f"Saved cart for user {cart.user}: {len(cart.items)} items, total {cart.total:.2f}")
        return cart

    async def delete(self, user_id: str) -> bool:
        result = await self.collection.delete_one({"user": user_id})
        return result.deleted_count > 0
