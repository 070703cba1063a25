"""
Tests for application wiring: lifespan, health endpoints and router prefixes.
"""
import pytest
import httpx
from unittest.mock import AsyncMock, patch

from storefront.core.config import settings
from storefront.main import create_app, lifespan


class TestLifespan:
    """Test the MongoDB connection lifecycle."""

    @pytest.mark.asyncio
    async def test_connects_and_closes(self):
        """The connection opens on startup and closes on shutdown."""
        app = create_app()
        with patch("storefront.main.connect_to_mongo", new_callable=AsyncMock) as connect, \
                patch("storefront.main.close_mongo_connection", new_callable=AsyncMock) as close:
            async with lifespan(app):
                connect.assert_awaited_once()
                close.assert_not_awaited()

            close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_closes_after_failure(self):
        """The connection is closed even when the app stops with an error."""
        app = create_app()
        with patch("storefront.main.connect_to_mongo", new_callable=AsyncMock), \
                patch("storefront.main.close_mongo_connection", new_callable=AsyncMock) as close:
            with pytest.raises(RuntimeError):
                async with lifespan(app):
                    raise RuntimeError("worker crashed")

            close.assert_awaited_once()


class TestRoutes:
    """Test the mounted endpoints."""

    def test_api_routes_use_prefix(self):
        """Catalog, cart, review and auth routes live under the API prefix."""
        paths = {route.path for route in create_app().routes}
        prefix = settings.API_V1_PREFIX

        assert f"{prefix}/products/{{product_id}}" in paths
        assert f"{prefix}/products/{{product_id}}/reviews" in paths
        assert f"{prefix}/reviews/{{review_id}}" in paths
        assert f"{prefix}/cart/items" in paths
        assert f"{prefix}/cart/items/{{product_id}}" in paths
        assert f"{prefix}/auth/login" in paths

    @pytest.mark.asyncio
    async def test_health_check(self):
        """The health endpoint answers without a database."""
        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://storefront.test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
