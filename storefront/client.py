from typing import Optional

import httpx

from storefront.api import create_client
from storefront.config import Settings, load_settings
from storefront.session import FileStorage, Storage
from storefront.services import AuthService, CartService, MediaService, OrderService, ProductService, ReviewService
from storefront.stores import (
    AuthStore,
    CartStore,
    CategoryAdminStore,
    DashboardStore,
    OrderAdminStore,
    OrderStore,
    ProductAdminStore,
    ProductStore,
    ReviewStore,
)
from storefront.uploads import ImageUploader, VideoUploader


class Storefront:
    """One client session: a configured HTTP client, the service façade and a
    fresh set of stores. Nothing is shared between instances.

    Usage::

        async with Storefront() as shop:
            await shop.auth.login("alice", "secret")
            await shop.products.fetch_products()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[Storage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or load_settings()
        self.storage = storage if storage is not None else FileStorage(self.settings.session_file)
        self.http = create_client(self.settings, self.storage, transport=transport)

        self.auth_service = AuthService(self.http, self.storage)
        self.product_service = ProductService(self.http)
        self.cart_service = CartService(self.http)
        self.order_service = OrderService(self.http)
        self.review_service = ReviewService(self.http)
        self.media_service = MediaService(self.http)

        self.auth = AuthStore(self.auth_service)
        self.cart = CartStore(self.cart_service)
        self.products = ProductStore(self.product_service, page_size=self.settings.page_size)
        self.orders = OrderStore(self.order_service)
        self.reviews = ReviewStore(self.review_service)

        self.admin_categories = CategoryAdminStore(self.product_service)
        self.admin_products = ProductAdminStore(self.product_service)
        self.admin_orders = OrderAdminStore(self.order_service)
        self.dashboard = DashboardStore(self.product_service, self.order_service)

    def image_uploader(self, product_id: int, display_order: int = 0) -> ImageUploader:
        return ImageUploader(self.media_service, product_id, display_order)

    def video_uploader(self, product_id: int, display_order: int = 0) -> VideoUploader:
        return VideoUploader(self.media_service, product_id, display_order)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
