"""
Async HTTP client used by the storefront front end.

Only the calls the product screens need are exposed: reading a product,
adding to the cart and signing in.
"""
import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from storefront.core.config import settings
from storefront.schemas.product import ProductResponse

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """A product could not be fetched (missing product or transport failure)."""


class StorefrontClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def get_product(self, product_id: str) -> ProductResponse:
        try:
            response = await self._client.get(f"/products/{product_id}", headers=self._headers())
            response.raise_for_status()
            return ProductResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise CatalogError(f"Product {product_id} not available: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise CatalogError(f"Product {product_id} could not be fetched: {e}") from e
        except ValidationError as e:
            raise CatalogError(f"Product {product_id} returned an unexpected payload") from e
        except ValueError as e:
            # body was not JSON
            raise CatalogError(f"Product {product_id} returned a malformed body") from e

    async def add_to_cart(self, product_id: str, quantity: int) -> bool:
        """Add a product to the signed-in user's cart. Returns whether it succeeded."""
        try:
            response = await self._client.post(
                "/cart/items",
                json={"productId": product_id, "quantity": quantity},
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.warning("Add to cart failed for %s: %s", product_id, e)
            return False

        if response.is_success:
            return True

        logger.warning("Add to cart rejected for %s: %s %s", product_id, response.status_code, response.text)
        return False

    async def login(self, email: str, password: str) -> str:
        """Sign in and keep the access token for later calls."""
        response = await self._client.post(
            "/auth/login",
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        response.raise_for_status()
        self.token = response.json()["access_token"]
        return self.token

    async def get_current_user(self) -> Optional[dict]:
        """Return the signed-in user, or None without a valid session."""
        if not self.token:
            return None

        try:
            response = await self._client.get("/auth/me", headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Session lookup failed: %s", e)
            return None

        if response.status_code != 200:
            return None
        return response.json()
