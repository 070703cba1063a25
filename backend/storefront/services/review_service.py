import logging
from typing import Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from fastapi import HTTPException, status

from storefront.models.review import Review
from storefront.schemas.review import ReviewResponse
from storefront.services.catalog_service import CatalogService
from storefront.utils.helpers import parse_object_id

logger = logging.getLogger(__name__)


def _to_response(review: dict) -> ReviewResponse:
    return ReviewResponse(
        id=str(review["_id"]),
        product=review["product"],
        user=review["user"],
        user_name=review.get("user_name", ""),
        rating=review["rating"],
        comment=review.get("comment", ""),
        created_at=review["created_at"]
    )


class ReviewService:
    """Service for product reviews."""

    @staticmethod
    async def list_reviews(product_id: str, db: AsyncIOMotorDatabase, limit: int = 100) -> Dict:
        """List a product's reviews, newest first, with the average rating."""
        await CatalogService.get_product(product_id, db)

        reviews = await db.reviews.find({"product": product_id}).sort("created_at", -1).to_list(length=limit)
        responses = [_to_response(review) for review in reviews]

        average = None
        if responses:
            average = round(sum(r.rating for r in responses) / len(responses), 2)

        return {
            "reviews": responses,
            "average_rating": average,
            "count": len(responses)
        }

    @staticmethod
    async def create_review(
        product_id: str,
        user: dict,
        rating: int,
        comment: str,
        db: AsyncIOMotorDatabase
    ) -> ReviewResponse:
        """Create a review. Each user may review a product once."""
        await CatalogService.get_product(product_id, db)
        user_id = str(user["_id"])

        existing = await db.reviews.find_one({"product": product_id, "user": user_id})
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already reviewed this product"
            )

        review_data = Review(
            product=product_id,
            user=user_id,
            user_name=user.get("name", ""),
            rating=rating,
            comment=comment
        ).model_dump(exclude={"id"})
        try:
            result = await db.reviews.insert_one(review_data)
        except DuplicateKeyError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already reviewed this product"
            )
        review_data["_id"] = result.inserted_id

        logger.info(f"User {user_id} reviewed product {product_id} ({rating}/5)")
        return _to_response(review_data)

    @staticmethod
    async def delete_review(review_id: str, user: dict, db: AsyncIOMotorDatabase) -> None:
        """Delete a review. Only its author or an admin may do so."""
        oid = parse_object_id(review_id, detail="Invalid review ID")
        review = await db.reviews.find_one({"_id": oid})

        if not review:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Review not found"
            )

        if review["user"] != str(user["_id"]) and user.get("role") != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only delete your own reviews"
            )

        await db.reviews.delete_one({"_id": oid})
