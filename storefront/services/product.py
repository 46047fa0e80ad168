from typing import List, Optional

import httpx
from pydantic import TypeAdapter

from storefront.api import clean_params, send
from storefront.schemas import (
    Category,
    CategoryPayload,
    Inventory,
    Page,
    Product,
    ProductPayload,
    ProductSearchParams,
)

_categories = TypeAdapter(List[Category])


class ProductService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _page(self, url: str, params: dict) -> Page[Product]:
        body = await send(self.client, "GET", url, params=clean_params(params))
        return Page[Product].model_validate(body)

    async def get_all_products(self, params: Optional[ProductSearchParams] = None) -> Page[Product]:
        params = params or ProductSearchParams()
        return await self._page("/api/public/products", params.to_payload())

    async def get_products(self, params: Optional[ProductSearchParams] = None) -> Page[Product]:
        return await self.get_all_products(params)

    async def get_product_by_id(self, product_id: int) -> Product:
        return Product.model_validate(await send(self.client, "GET", f"/api/public/products/{product_id}"))

    async def search_products(self, keyword: str, params: Optional[ProductSearchParams] = None) -> Page[Product]:
        params = params or ProductSearchParams()
        return await self._page(
            "/api/public/products/search",
            {"keyword": keyword, "page": params.page, "size": params.size, "sort": params.sort},
        )

    async def get_all_categories(self) -> List[Category]:
        return _categories.validate_python(await send(self.client, "GET", "/api/public/categories"))

    async def get_categories(self) -> List[Category]:
        return await self.get_all_categories()

    async def get_products_by_category(
        self, category_id: int, params: Optional[ProductSearchParams] = None
    ) -> Page[Product]:
        params = params or ProductSearchParams()
        return await self._page(
            f"/api/public/categories/{category_id}/products",
            {"page": params.page, "size": params.size, "sort": params.sort},
        )

    async def get_products_by_price_range(
        self, min_price: float, max_price: float, params: Optional[ProductSearchParams] = None
    ) -> Page[Product]:
        params = params or ProductSearchParams()
        return await self._page(
            "/api/public/products",
            {
                "page": params.page,
                "size": params.size,
                "sort": params.sort,
                "minPrice": min_price,
                "maxPrice": max_price,
            },
        )

    async def get_product_inventory(self, product_id: int) -> Inventory:
        body = await send(self.client, "GET", f"/api/public/products/{product_id}/inventory")
        return Inventory.model_validate(body)

    # Admin endpoints

    async def create_product(self, data: ProductPayload) -> Product:
        body = await send(self.client, "POST", "/api/admin/products", json=data.to_payload())
        return Product.model_validate(body)

    async def update_product(self, product_id: int, data: ProductPayload) -> Product:
        body = await send(self.client, "PUT", f"/api/admin/products/{product_id}", json=data.to_payload())
        return Product.model_validate(body)

    async def delete_product(self, product_id: int) -> None:
        await send(self.client, "DELETE", f"/api/admin/products/{product_id}")

    async def update_inventory(self, product_id: int, quantity: int) -> Inventory:
        body = await send(
            self.client, "PUT", f"/api/admin/products/{product_id}/inventory", params={"quantity": quantity}
        )
        return Inventory.model_validate(body)

    async def add_stock(self, product_id: int, quantity: int) -> Inventory:
        body = await send(
            self.client, "POST", f"/api/admin/products/{product_id}/inventory/add", params={"quantity": quantity}
        )
        return Inventory.model_validate(body)

    async def remove_stock(self, product_id: int, quantity: int) -> Inventory:
        body = await send(
            self.client, "POST", f"/api/admin/products/{product_id}/inventory/remove", params={"quantity": quantity}
        )
        return Inventory.model_validate(body)

    # Category management (admin)

    async def create_category(self, name: str) -> Category:
        body = await send(self.client, "POST", "/api/admin/categories", json=CategoryPayload(name=name).to_payload())
        return Category.model_validate(body)

    async def update_category(self, category_id: int, name: str) -> Category:
        body = await send(
            self.client, "PUT", f"/api/admin/categories/{category_id}", json=CategoryPayload(name=name).to_payload()
        )
        return Category.model_validate(body)

    async def delete_category(self, category_id: int) -> None:
        await send(self.client, "DELETE", f"/api/admin/categories/{category_id}")
