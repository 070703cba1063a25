import re
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status

from storefront.utils.helpers import parse_object_id


class CatalogService:
    """Read access to the ``products`` collection."""

    @staticmethod
    async def get_product(product_id: str, db: AsyncIOMotorDatabase) -> dict:
        """Get a product document by ID, raising 400/404 when it cannot be resolved."""
        oid = parse_object_id(product_id, detail="Invalid product ID")
        product = await db.products.find_one({"_id": oid})

        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found"
            )

        return product

    @staticmethod
    def build_query(category: Optional[str] = None, q: Optional[str] = None) -> dict:
        """Build the MongoDB filter for a product listing."""
        query = {}

        if q:
            pattern = re.escape(q)
            query["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}},
                {"category": {"$regex": pattern, "$options": "i"}}
            ]
        if category:
            query["category"] = category

        return query

    @staticmethod
    async def list_products(
        db: AsyncIOMotorDatabase,
        category: Optional[str] = None,
        q: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[dict]:
        query = CatalogService.build_query(category=category, q=q)
        return await db.products.find(query).skip(skip).limit(limit).to_list(length=limit)
