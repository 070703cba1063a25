from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from storefront.api.deps import get_db, get_current_user
from storefront.schemas.cart import (
    AddToCartRequest,
    UpdateCartItemRequest,
    CartResponse
)
from storefront.services.cart_service import CartService

router = APIRouter()


@router.post("/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    request: AddToCartRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Add a product to the cart.

    Validates:
    - Product exists
    - Sufficient stock available

    If product already in cart, increases quantity.
    """
    user_id = str(current_user["_id"])

    cart = await CartService.add_item(
        user_id=user_id,
        product_id=request.product_id,
        quantity=request.quantity,
        db=db
    )

    return CartResponse.from_cart(cart)


@router.get("", response_model=CartResponse)
async def get_cart(
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get the current user's cart with its derived total."""
    user_id = str(current_user["_id"])
    cart = await CartService.get_cart(user_id, db)
    return CartResponse.from_cart(cart)


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Update the quantity of an item in the cart.

    Validates stock availability before updating. A quantity of 0 removes the item.
    """
    user_id = str(current_user["_id"])

    cart = await CartService.update_item_quantity(
        user_id=user_id,
        product_id=product_id,
        quantity=request.quantity,
        db=db
    )
    return CartResponse.from_cart(cart)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Remove an item from the cart.
    """
    user_id = str(current_user["_id"])
    cart = await CartService.remove_item(user_id, product_id, db)
    return CartResponse.from_cart(cart)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Clear all items from the cart.
    """
    user_id = str(current_user["_id"])
    cart = await CartService.clear_cart(user_id, db)
    return CartResponse.from_cart(cart)
