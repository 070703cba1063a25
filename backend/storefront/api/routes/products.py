from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from storefront.api.deps import get_db, get_current_admin
from storefront.models.product import Product
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from storefront.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def get_products(
    category: Optional[str] = None,
    q: Optional[str] = Query(None, min_length=1),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get list of products with optional filters.

    Filters:
    - category: Filter by product category
    - q: Case-insensitive search on name, description and category
    """
    products = await CatalogService.list_products(db, category=category, q=q, skip=skip, limit=limit)
    return [ProductResponse.from_document(product) for product in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get a single product by ID."""
    product = await CatalogService.get_product(product_id, db)
    return ProductResponse.from_document(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    current_user: dict = Depends(get_current_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Create a new product (admins only)."""
    product_data = Product(
        name=product.name,
        description=product.description,
        price=product.price,
        stock=product.stock,
        category=product.category,
        image_url=product.image_url,
        images=product.images
    ).model_dump(by_alias=True, exclude={"id"})

    result = await db.products.insert_one(product_data)
    product_data["_id"] = result.inserted_id

    return ProductResponse.from_document(product_data)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    current_user: dict = Depends(get_current_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Update a product (admins only).

    Prices captured by existing cart line items are not affected.
    """
    product = await CatalogService.get_product(product_id, db)

    update_data = product_update.model_dump(by_alias=True, exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )
    update_data["updated_at"] = datetime.utcnow()

    await db.products.update_one({"_id": product["_id"]}, {"$set": update_data})
    product.update(update_data)

    return ProductResponse.from_document(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    current_user: dict = Depends(get_current_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Delete a product (admins only)."""
    product = await CatalogService.get_product(product_id, db)
    await db.products.delete_one({"_id": product["_id"]})
