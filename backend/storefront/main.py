from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from storefront.core.config import settings
from storefront.core.database import connect_to_mongo, close_mongo_connection
from storefront.api.routes import auth, products, cart, reviews

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the MongoDB connection for the lifetime of the app."""
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    await connect_to_mongo()
    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        await close_mongo_connection()


def create_app() -> FastAPI:
    """Build the API app: CORS, health endpoints and the versioned routers."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Backend API for the Storefront - product catalog, shopping cart and reviews",
        version=VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "storefront-backend", "version": VERSION}

    @app.get("/")
    async def root():
        """API information."""
        return {
            "name": settings.PROJECT_NAME,
            "version": VERSION,
            "api": settings.API_V1_PREFIX,
            "docs": "/docs",
            "health": "/health"
        }

    prefix = settings.API_V1_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(products.router, prefix=f"{prefix}/products", tags=["Products"])
    # review paths span /products/{id}/reviews and /reviews/{id}
    app.include_router(reviews.router, prefix=prefix, tags=["Reviews"])
    app.include_router(cart.router, prefix=f"{prefix}/cart", tags=["Cart"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
