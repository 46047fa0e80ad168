"""
Back-office stores: categories, products (with the product form), orders and
the dashboard counters. Every screen re-fetches its listing after a mutation.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from storefront.errors import ClientValidationError, error_message
from storefront.pagination import Pagination
from storefront.schemas import Category, Order, OrderStatus, Product, ProductPayload, ProductSearchParams
from storefront.services.order import OrderService
from storefront.services.product import ProductService
from storefront.stores.base import Store

logger = logging.getLogger(__name__)


# Categories

class CategoryAdminState(BaseModel):
    categories: List[Category] = []
    is_loading: bool = False
    error: Optional[str] = None


class CategoryAdminStore(Store[CategoryAdminState]):
    def __init__(self, service: ProductService):
        self.service = service
        super().__init__(CategoryAdminState())

    async def load(self) -> None:
        self.set(is_loading=True, error=None)
        try:
            categories = await self.service.get_categories()
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to load categories"), is_loading=False)
            return
        self.set(categories=categories, is_loading=False)

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ClientValidationError("Category name is required")
        return name

    async def create(self, name: str) -> Category:
        name = self._clean_name(name)
        try:
            category = await self.service.create_category(name)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to create category"))
            raise
        await self.load()
        return category

    async def update(self, category_id: int, name: str) -> Category:
        name = self._clean_name(name)
        try:
            category = await self.service.update_category(category_id, name)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to update category"))
            raise
        await self.load()
        return category

    async def delete(self, category_id: int) -> None:
        try:
            await self.service.delete_category(category_id)
        except httpx.HTTPError as exc:
            self.set(
                error=error_message(
                    exc, "Failed to delete category. Make sure no products are using this category."
                )
            )
            raise
        await self.load()


# Products

class ProductForm(BaseModel):
    """Values typed into the create/edit product form."""
    name: str = ""
    description: str = ""
    price: Optional[float] = None
    category_id: Optional[int] = None
    image_url: str = ""
    stock_quantity: Optional[int] = None

    def to_payload(self) -> ProductPayload:
        if not self.name.strip():
            raise ClientValidationError("Product name is required")
        if self.price is None or self.price <= 0:
            raise ClientValidationError("Valid price is required")
        if not self.category_id:
            raise ClientValidationError("Category is required")
        if self.stock_quantity is None or self.stock_quantity < 0:
            raise ClientValidationError("Valid stock quantity is required")
        return ProductPayload(
            name=self.name.strip(),
            description=self.description.strip(),
            price=self.price,
            category_id=self.category_id,
            image_url=self.image_url.strip() or None,
        )


class ProductAdminState(BaseModel):
    products: List[Product] = []
    pagination: Pagination = Pagination(page_size=20)
    search_term: str = ""
    is_loading: bool = False
    is_submitting: bool = False
    error: Optional[str] = None


class ProductAdminStore(Store[ProductAdminState]):
    def __init__(self, service: ProductService, page_size: int = 20):
        self.service = service
        self.page_size = page_size
        super().__init__(ProductAdminState(pagination=Pagination(page_size=page_size)))

    async def fetch_products(self, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None, search_term="")
        try:
            result = await self.service.get_products(ProductSearchParams(page=page, size=size or self.page_size))
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to fetch products"), is_loading=False)
            return
        self.set(products=result.content, pagination=Pagination.from_page(result), is_loading=False)

    async def search(self, term: str) -> None:
        if not term.strip():
            await self.fetch_products()
            return
        self.set(is_loading=True, error=None, search_term=term)
        try:
            result = await self.service.search_products(term)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to search products"), is_loading=False)
            return
        self.set(products=result.content, pagination=Pagination.from_page(result), is_loading=False)

    async def go_to_page(self, page: int) -> None:
        self.state.pagination.check_page(page)
        await self.fetch_products(page, self.state.pagination.page_size)

    async def delete(self, product_id: int) -> None:
        try:
            await self.service.delete_product(product_id)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to delete product"))
            raise
        logger.info("Product %s deleted", product_id)
        await self.fetch_products(self.state.pagination.current_page, self.state.pagination.page_size)

    async def load_form(self, product_id: int) -> ProductForm:
        """Prefill the edit form from the product and its inventory."""
        self.set(is_loading=True, error=None)
        try:
            product = await self.service.get_product_by_id(product_id)
            inventory = await self.service.get_product_inventory(product_id)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to load product"), is_loading=False)
            raise
        self.set(is_loading=False)
        return ProductForm(
            name=product.name,
            description=product.description or "",
            price=product.price,
            category_id=product.category_id,
            image_url=product.image_url or "",
            stock_quantity=inventory.quantity,
        )

    async def save(self, form: ProductForm, product_id: Optional[int] = None) -> Product:
        """Create a product, or update ``product_id``, then bring its stock in line.

        On update the inventory call is only made when the quantity changed.
        """
        self.set(error=None)
        try:
            payload = form.to_payload()
        except ClientValidationError as exc:
            self.set(error=exc.message)
            raise
        quantity = form.stock_quantity
        self.set(is_submitting=True)
        try:
            if product_id is not None:
                product = await self.service.update_product(product_id, payload)
                current = await self.service.get_product_inventory(product_id)
                if current.quantity != quantity:
                    await self.service.update_inventory(product_id, quantity)
            else:
                product = await self.service.create_product(payload)
                await self.service.update_inventory(product.id, quantity)
        except httpx.HTTPError as exc:
            action = "update" if product_id is not None else "create"
            self.set(error=error_message(exc, f"Failed to {action} product"), is_submitting=False)
            raise
        self.set(is_submitting=False)
        return product


# Orders

class OrderAdminState(BaseModel):
    orders: List[Order] = []
    pagination: Pagination = Pagination(page_size=20)
    is_loading: bool = False
    error: Optional[str] = None


class OrderAdminStore(Store[OrderAdminState]):
    def __init__(self, service: OrderService, page_size: int = 20):
        self.service = service
        self.page_size = page_size
        super().__init__(OrderAdminState(pagination=Pagination(page_size=page_size)))

    async def fetch_orders(self, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None)
        try:
            result = await self.service.get_all_orders(page, size or self.page_size)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to fetch orders"), is_loading=False)
            return
        self.set(orders=result.content, pagination=Pagination.from_page(result), is_loading=False)

    async def go_to_page(self, page: int) -> None:
        self.state.pagination.check_page(page)
        await self.fetch_orders(page, self.state.pagination.page_size)

    async def update_status(self, order_id: int, status: OrderStatus) -> Order:
        try:
            order = await self.service.update_order_status(order_id, status)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to update order status"))
            raise
        await self.fetch_orders(self.state.pagination.current_page, self.state.pagination.page_size)
        return order


# Dashboard

class DashboardState(BaseModel):
    total_products: int = 0
    total_orders: int = 0
    is_loading: bool = False


class DashboardStore(Store[DashboardState]):
    def __init__(self, products: ProductService, orders: OrderService):
        self.products = products
        self.orders = orders
        super().__init__(DashboardState())

    async def load_stats(self) -> None:
        self.set(is_loading=True)
        try:
            products = await self.products.get_products(ProductSearchParams(page=0, size=1))
            orders = await self.orders.get_all_orders(page=0, size=1)
        except httpx.HTTPError:
            logger.exception("Failed to load dashboard stats")
            self.set(is_loading=False)
            return
        self.set(total_products=products.total_elements, total_orders=orders.total_elements, is_loading=False)
