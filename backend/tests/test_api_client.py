"""
Tests for the storefront HTTP client, using httpx's mock transport.
"""
import json
import pytest
import httpx

from storefront.client.api_client import CatalogError, StorefrontClient

PRODUCT = {
    "_id": "p1",
    "name": "Ceramic Mug",
    "description": "Stoneware mug",
    "price": 9.99,
    "stock": 5,
    "category": "kitchen",
    "imageUrl": "A",
    "images": ["B"],
}


def make_client(handler, token=None):
    return StorefrontClient(
        base_url="http://storefront.test/api",
        token=token,
        transport=httpx.MockTransport(handler)
    )


class TestGetProduct:
    """Test product fetches."""

    @pytest.mark.asyncio
    async def test_get_product(self):
        """The product record is parsed from its wire names."""
        def handler(request):
            assert request.url.path == "/api/products/p1"
            return httpx.Response(200, json=PRODUCT)

        async with make_client(handler) as client:
            product = await client.get_product("p1")

        assert product.id == "p1"
        assert product.image_url == "A"
        assert product.images == ["B"]

    @pytest.mark.asyncio
    async def test_not_found_raises_catalog_error(self):
        """Non-2xx responses raise CatalogError."""
        def handler(request):
            return httpx.Response(404, json={"detail": "Product not found"})

        async with make_client(handler) as client:
            with pytest.raises(CatalogError):
                await client.get_product("missing")

    @pytest.mark.asyncio
    async def test_transport_error_raises_catalog_error(self):
        """Network failures raise CatalogError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(CatalogError):
                await client.get_product("p1")

    @pytest.mark.asyncio
    async def test_bad_payload_raises_catalog_error(self):
        """Responses that are not a product record raise CatalogError."""
        def handler(request):
            return httpx.Response(200, json={"unexpected": True})

        async with make_client(handler) as client:
            with pytest.raises(CatalogError):
                await client.get_product("p1")

    @pytest.mark.asyncio
    async def test_non_json_body_raises_catalog_error(self):
        """A 2xx body that is not JSON, such as a gateway page, raises CatalogError."""
        def handler(request):
            return httpx.Response(200, text="<html>gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(CatalogError):
                await client.get_product("p1")


class TestAddToCart:
    """Test cart submissions."""

    @pytest.mark.asyncio
    async def test_add_to_cart_success(self):
        """A 201 response is a success; the body carries productId and quantity."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={})

        async with make_client(handler, token="tok") as client:
            assert await client.add_to_cart("p1", 3) is True

        assert seen["path"] == "/api/cart/items"
        assert seen["auth"] == "Bearer tok"
        assert seen["body"] == {"productId": "p1", "quantity": 3}

    @pytest.mark.asyncio
    async def test_add_to_cart_rejected(self):
        """Error responses report failure."""
        def handler(request):
            return httpx.Response(400, json={"detail": "Insufficient stock"})

        async with make_client(handler, token="tok") as client:
            assert await client.add_to_cart("p1", 9) is False

    @pytest.mark.asyncio
    async def test_add_to_cart_transport_error(self):
        """Network failures report failure instead of raising."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler, token="tok") as client:
            assert await client.add_to_cart("p1", 1) is False


class TestSession:
    """Test sign-in helpers."""

    @pytest.mark.asyncio
    async def test_login_stores_token(self):
        """login keeps the returned token for later requests."""
        def handler(request):
            if request.url.path == "/api/auth/login":
                return httpx.Response(200, json={"access_token": "tok", "token_type": "bearer"})
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(200, json={"id": "u1", "name": "Ada"})

        async with make_client(handler) as client:
            await client.login("ada@example.com", "secret123")
            user = await client.get_current_user()

        assert client.token == "tok"
        assert user["name"] == "Ada"

    @pytest.mark.asyncio
    async def test_no_token_means_no_user(self):
        """Without a token there is no session lookup."""
        def handler(request):
            raise AssertionError("no request expected")

        async with make_client(handler) as client:
            assert await client.get_current_user() is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
