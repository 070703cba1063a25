import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status

from storefront.models.cart import Cart, CartItem
from storefront.repositories.cart_repository import CartRepository
from storefront.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class CartService:
    """Service for cart operations."""

    @staticmethod
    async def get_cart(user_id: str, db: AsyncIOMotorDatabase) -> Cart:
        """Get the user's cart, or a new empty (unsaved) one."""
        cart = await CartRepository(db).get_by_user(user_id)
        if cart is None:
            return Cart(user=user_id)
        return cart

    @staticmethod
    def _check_stock(product: dict, quantity: int, in_cart: int = 0) -> None:
        if product["stock"] <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is out of stock"
            )

        if product["stock"] < quantity:
            detail = f"Insufficient stock. Available: {product['stock']}"
            if in_cart:
                detail += f", in cart: {in_cart}"
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=detail
            )

    @staticmethod
    async def add_item(
        user_id: str,
        product_id: str,
        quantity: int,
        db: AsyncIOMotorDatabase
    ) -> Cart:
        """
        Add a product to the cart.

        A product already in the cart is merged into its existing line item:
        quantities are summed and the originally captured price is kept.
        """
        product = await CatalogService.get_product(product_id, db)
        cart = await CartService.get_cart(user_id, db)

        item = cart.find_item(product_id)
        if item is not None:
            new_quantity = item.quantity + quantity
            CartService._check_stock(product, new_quantity, in_cart=item.quantity)
            item.quantity = new_quantity
        else:
            CartService._check_stock(product, quantity)
            cart.items.append(CartItem(
                product=product_id,
                quantity=quantity,
                price=product["price"]
            ))

        logger.info(f"User {user_id} added {quantity} x {product_id} to cart")
        return await CartRepository(db).save(cart)

    @staticmethod
    async def update_item_quantity(
        user_id: str,
        product_id: str,
        quantity: int,
        db: AsyncIOMotorDatabase
    ) -> Cart:
        """Set an item's quantity. A quantity of 0 removes the item."""
        if quantity == 0:
            return await CartService.remove_item(user_id, product_id, db)

        cart = await CartService.get_cart(user_id, db)
        item = cart.find_item(product_id)

        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found in cart"
            )

        product = await CatalogService.get_product(product_id, db)
        CartService._check_stock(product, quantity)
        item.quantity = quantity

        return await CartRepository(db).save(cart)

    @staticmethod
    async def remove_item(
        user_id: str,
        product_id: str,
        db: AsyncIOMotorDatabase
    ) -> Cart:
        """Remove item from cart."""
        cart = await CartService.get_cart(user_id, db)

        original_length = len(cart.items)
        cart.items = [item for item in cart.items if item.product != product_id]

        if len(cart.items) == original_length:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found in cart"
            )

        logger.info(f"User {user_id} removed {product_id} from cart")
        return await CartRepository(db).save(cart)

    @staticmethod
    async def clear_cart(user_id: str, db: AsyncIOMotorDatabase) -> Cart:
        """Delete the user's cart document and return an empty cart."""
        await CartRepository(db).delete(user_id)
        logger.info(f"Cleared cart for user {user_id}")
        return Cart(user=user_id)
