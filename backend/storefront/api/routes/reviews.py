from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from storefront.api.deps import get_db, get_current_user
from storefront.schemas.review import ReviewCreate, ReviewResponse, ReviewListResponse
from storefront.services.review_service import ReviewService

router = APIRouter()


@router.get("/products/{product_id}/reviews", response_model=ReviewListResponse)
async def get_product_reviews(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """List reviews for a product, newest first (public endpoint)."""
    return await ReviewService.list_reviews(product_id, db)


@router.post(
    "/products/{product_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_product_review(
    product_id: str,
    request: ReviewCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Review a product.

    A user can review each product once.
    """
    return await ReviewService.create_review(
        product_id=product_id,
        user=current_user,
        rating=request.rating,
        comment=request.comment,
        db=db
    )


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Delete a review (author or admin)."""
    await ReviewService.delete_review(review_id, current_user, db)
