import logging
from typing import Awaitable, Callable, List, Literal, Optional

import httpx
from pydantic import BaseModel

from storefront.errors import error_message
from storefront.pagination import Pagination
from storefront.schemas import Category, Page, Product, ProductSearchParams
from storefront.services.product import ProductService
from storefront.stores.base import Store

logger = logging.getLogger(__name__)


class ProductFilters(BaseModel):
    category_id: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None


class ProductState(BaseModel):
    products: List[Product] = []
    categories: List[Category] = []
    current_product: Optional[Product] = None
    pagination: Pagination = Pagination()
    filters: ProductFilters = ProductFilters()
    listing: Literal["all", "search", "category", "price"] = "all"
    is_loading: bool = False
    error: Optional[str] = None


class ProductStore(Store[ProductState]):
    def __init__(self, service: ProductService, page_size: int = 12):
        self.service = service
        self.page_size = page_size
        super().__init__(ProductState(pagination=Pagination(page_size=page_size)))

    async def _load_page(self, call: Callable[[], Awaitable[Page[Product]]], fallback: str) -> None:
        try:
            page = await call()
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, fallback), is_loading=False)
            return
        self.set(products=page.content, pagination=Pagination.from_page(page), is_loading=False)

    def _params(self, page: int, size: Optional[int]) -> ProductSearchParams:
        return ProductSearchParams(page=page, size=size or self.page_size)

    async def fetch_products(self, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None, listing="all")
        params = self._params(page, size)
        await self._load_page(lambda: self.service.get_products(params), "Failed to fetch products")

    async def fetch_categories(self) -> None:
        try:
            categories = await self.service.get_categories()
        except httpx.HTTPError:
            logger.exception("Failed to fetch categories")
            return
        self.set(categories=categories)

    async def fetch_product_by_id(self, product_id: int) -> None:
        self.set(is_loading=True, error=None)
        try:
            product = await self.service.get_product_by_id(product_id)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to fetch product"), is_loading=False)
            return
        self.set(current_product=product, is_loading=False)

    async def search_products(self, keyword: str, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None, filters=ProductFilters(search=keyword), listing="search")
        params = self._params(page, size)
        await self._load_page(lambda: self.service.search_products(keyword, params), "Failed to search products")

    async def filter_by_category(self, category_id: int, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None, filters=ProductFilters(category_id=category_id), listing="category")
        params = self._params(page, size)
        await self._load_page(
            lambda: self.service.get_products_by_category(category_id, params), "Failed to filter products"
        )

    async def filter_by_price_range(
        self, min_price: float, max_price: float, page: int = 0, size: Optional[int] = None
    ) -> None:
        filters = self.state.filters.model_copy(update={"min_price": min_price, "max_price": max_price})
        self.set(is_loading=True, error=None, filters=filters, listing="price")
        params = self._params(page, size)
        await self._load_page(
            lambda: self.service.get_products_by_price_range(min_price, max_price, params),
            "Failed to filter products",
        )

    async def clear_filters(self) -> None:
        self.set(filters=ProductFilters())
        await self.fetch_products()

    async def go_to_page(self, page: int) -> None:
        """Re-issue whichever listing was loaded last, for ``page``."""
        self.state.pagination.check_page(page)
        filters = self.state.filters
        size = self.state.pagination.page_size
        listing = self.state.listing
        if listing == "search":
            await self.search_products(filters.search, page, size)
        elif listing == "category":
            await self.filter_by_category(filters.category_id, page, size)
        elif listing == "price":
            await self.filter_by_price_range(filters.min_price, filters.max_price, page, size)
        else:
            await self.fetch_products(page, size)

    def set_current_product(self, product: Optional[Product]) -> None:
        self.set(current_product=product)
