"""
Tests for the cart endpoints, called directly with a mocked database.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi import HTTPException, status
from bson import ObjectId
from pydantic import ValidationError

from storefront.api.routes.cart import (
    add_to_cart,
    get_cart,
    update_cart_item,
    remove_from_cart,
    clear_cart
)
from storefront.schemas.cart import AddToCartRequest, CartResponse, UpdateCartItemRequest

USER = {"_id": ObjectId("64b7f0c2a1e4c3d2b1a09f87"), "name": "Ada", "role": "customer"}
PRODUCT_ID = "64b7f0c2a1e4c3d2b1a09f88"


def make_db():
    stored = {}
    mock_db = MagicMock()
    mock_db.products.find_one = AsyncMock(return_value={
        "_id": ObjectId(PRODUCT_ID), "name": "Mug", "price": 9.99, "stock": 5
    })

    async def find_cart(query):
        return stored.get(query["user"])

    async def replace_cart(query, document, upsert=False):
        stored[query["user"]] = document

    async def delete_cart(query):
        stored.pop(query["user"], None)
        return MagicMock(deleted_count=1)

    mock_db.carts.find_one = AsyncMock(side_effect=find_cart)
    mock_db.carts.replace_one = AsyncMock(side_effect=replace_cart)
    mock_db.carts.delete_one = AsyncMock(side_effect=delete_cart)
    return mock_db


class TestCartRequests:
    """Test request validation."""

    def test_add_request_uses_product_id_alias(self):
        """The add body accepts productId."""
        request = AddToCartRequest.model_validate({"productId": PRODUCT_ID, "quantity": 2})
        assert request.product_id == PRODUCT_ID

    def test_add_request_rejects_zero_quantity(self):
        """Adding zero items is a validation error."""
        with pytest.raises(ValidationError):
            AddToCartRequest(productId=PRODUCT_ID, quantity=0)

    def test_update_request_allows_zero(self):
        """Updating to zero is allowed; it removes the item."""
        assert UpdateCartItemRequest(quantity=0).quantity == 0

    def test_update_request_rejects_negative(self):
        """Negative quantities are a validation error."""
        with pytest.raises(ValidationError):
            UpdateCartItemRequest(quantity=-1)


class TestCartEndpoints:
    """Test the cart endpoint flow."""

    @pytest.mark.asyncio
    async def test_add_then_merge(self):
        """9.99 x 3 totals 29.97; adding 2 more merges into one line at 49.95."""
        mock_db = make_db()

        first = await add_to_cart(
            request=AddToCartRequest(productId=PRODUCT_ID, quantity=3),
            current_user=USER,
            db=mock_db
        )
        assert isinstance(first, CartResponse)
        assert first.total == 29.97

        second = await add_to_cart(
            request=AddToCartRequest(productId=PRODUCT_ID, quantity=2),
            current_user=USER,
            db=mock_db
        )
        assert len(second.items) == 1
        assert second.items[0].quantity == 5
        assert second.item_count == 5
        assert second.total == 49.95

    @pytest.mark.asyncio
    async def test_get_empty_cart(self):
        """A user without a cart gets an empty one."""
        result = await get_cart(current_user=USER, db=make_db())
        assert result.user == str(USER["_id"])
        assert result.items == []
        assert result.total == 0

    @pytest.mark.asyncio
    async def test_update_remove_and_clear(self):
        """Update, removal and clearing keep the total consistent."""
        mock_db = make_db()
        await add_to_cart(
            request=AddToCartRequest(productId=PRODUCT_ID, quantity=1),
            current_user=USER,
            db=mock_db
        )

        updated = await update_cart_item(
            product_id=PRODUCT_ID,
            request=UpdateCartItemRequest(quantity=2),
            current_user=USER,
            db=mock_db
        )
        assert updated.total == 19.98

        removed = await remove_from_cart(product_id=PRODUCT_ID, current_user=USER, db=mock_db)
        assert removed.items == []
        assert removed.total == 0

        cleared = await clear_cart(current_user=USER, db=mock_db)
        assert cleared.total == 0
        mock_db.carts.delete_one.assert_called_once_with({"user": str(USER["_id"])})

    @pytest.mark.asyncio
    async def test_remove_unknown_item(self):
        """Removing an item not in the cart gives 404."""
        with pytest.raises(HTTPException) as exc_info:
            await remove_from_cart(product_id=PRODUCT_ID, current_user=USER, db=make_db())

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
