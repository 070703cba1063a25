"""
View model for the product detail screen.

Holds everything the page shows for one product: the fetch state, the image
gallery, the quantity stepper and the add-to-cart action. ``render`` returns a
plain snapshot that a template or UI layer can draw.
"""
import logging
from enum import Enum
from typing import Callable, List, Optional
from urllib.parse import quote

from pydantic import BaseModel

from storefront.client.api_client import CatalogError, StorefrontClient
from storefront.schemas.product import ProductResponse

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found or an error occurred."
CART_ERROR_MESSAGE = "Could not add this item to your cart. Please try again."


class ViewState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"
    LOADED_WITH_QUANTITY = "loaded_with_quantity"


class CancellationToken:
    """Marks an in-flight fetch whose result must no longer be applied."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def build_gallery(image_url: Optional[str], images: Optional[List[str]]) -> List[str]:
    """Primary image first, then each additional image not already listed."""
    gallery: List[str] = []
    for image in [image_url, *(images or [])]:
        if image and image not in gallery:
            gallery.append(image)
    return gallery


class ProductDetailRender(BaseModel):
    """What the product detail page should show right now."""
    state: ViewState
    error: Optional[str] = None
    recovery_link: Optional[str] = None

    product_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    category_link: Optional[str] = None
    price_label: Optional[str] = None
    in_stock: bool = False
    stock_label: Optional[str] = None

    images: List[str] = []
    selected_image: Optional[str] = None
    selected_index: int = 0
    show_thumbnails: bool = False

    show_quantity_control: bool = False
    quantity: int = 1
    max_quantity: int = 0
    can_add_to_cart: bool = False
    cart_error: Optional[str] = None

    show_sign_in: bool = False
    sign_in_link: Optional[str] = None
    back_link: str = "/products"


class ProductDetailView:
    def __init__(
        self,
        product_id: str,
        client: StorefrontClient,
        user: Optional[dict] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.product_id = product_id
        self.client = client
        self.user = user
        self.navigate = navigate or (lambda path: None)

        self.product: Optional[ProductResponse] = None
        self.loading = True
        self.error: Optional[str] = None
        self.images: List[str] = []
        self.current_image_index = 0
        self.quantity = 1
        self.cart_error: Optional[str] = None
        self._token: Optional[CancellationToken] = None

    @property
    def state(self) -> ViewState:
        if self.loading:
            return ViewState.LOADING
        if self.error or self.product is None:
            return ViewState.ERROR
        if self.product.stock > 0 and self.user:
            return ViewState.LOADED_WITH_QUANTITY
        return ViewState.LOADED

    async def load(self) -> None:
        """Fetch the product once. Failures end in the ERROR state; there is no retry."""
        if self._token is not None:
            self._token.cancel()
        token = CancellationToken()
        self._token = token
        self.loading = True

        try:
            product = await self.client.get_product(self.product_id)
        except CatalogError as e:
            if token.cancelled:
                return
            logger.error(f"Error fetching product {self.product_id}: {e}")
            self.product = None
            self.error = NOT_FOUND_MESSAGE
            self.loading = False
            return

        if token.cancelled:
            logger.debug(f"Discarding stale fetch for product {self.product_id}")
            return

        self.product = product
        self.error = None
        self.images = build_gallery(product.image_url, product.images)
        self.current_image_index = 0
        self.quantity = 1
        self.loading = False

    def close(self) -> None:
        """Tear the view down; an in-flight fetch will not touch its state."""
        if self._token is not None:
            self._token.cancel()

    def select_image(self, index: int) -> None:
        if 0 <= index < len(self.images):
            self.current_image_index = index

    def set_quantity(self, value) -> bool:
        """
        Accept a new quantity from the input box.

        Values that do not parse or fall outside [1, stock] are ignored and
        the current quantity is kept.
        """
        try:
            quantity = int(value)
        except (TypeError, ValueError):
            return False

        if self.product is None or not 1 <= quantity <= self.product.stock:
            return False

        self.quantity = quantity
        return True

    def increment(self) -> None:
        if self.product is not None and self.quantity < self.product.stock:
            self.quantity += 1

    def decrement(self) -> None:
        if self.quantity > 1:
            self.quantity -= 1

    async def add_to_cart(self) -> bool:
        """Submit the selected quantity. Navigates to the cart on success."""
        if self.state != ViewState.LOADED_WITH_QUANTITY:
            return False

        self.cart_error = None
        success = await self.client.add_to_cart(self.product.id, self.quantity)

        if success:
            self.navigate("/cart")
        else:
            self.cart_error = CART_ERROR_MESSAGE
        return success

    def render(self) -> ProductDetailRender:
        state = self.state

        if state == ViewState.LOADING:
            return ProductDetailRender(state=state)

        if state == ViewState.ERROR:
            return ProductDetailRender(
                state=state,
                error=self.error or NOT_FOUND_MESSAGE,
                recovery_link="/products"
            )

        product = self.product
        in_stock = product.stock > 0
        with_quantity = state == ViewState.LOADED_WITH_QUANTITY

        return ProductDetailRender(
            state=state,
            product_id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            category_link=f"/products?category={quote(product.category)}",
            price_label=f"${product.price:.2f}",
            in_stock=in_stock,
            stock_label=f"In Stock ({product.stock} available)" if in_stock else "Out of Stock",
            images=list(self.images),
            selected_image=self.images[self.current_image_index] if self.images else None,
            selected_index=self.current_image_index,
            show_thumbnails=len(self.images) > 1,
            show_quantity_control=with_quantity,
            quantity=self.quantity,
            max_quantity=product.stock,
            can_add_to_cart=with_quantity,
            cart_error=self.cart_error,
            show_sign_in=not self.user,
            sign_in_link=None if self.user else "/login"
        )
