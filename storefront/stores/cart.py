from typing import Optional

import httpx
from pydantic import BaseModel

from storefront.errors import ClientValidationError, error_message
from storefront.schemas import AddToCartRequest, CartResponse
from storefront.services.cart import CartService
from storefront.stores.base import Store


class CartState(BaseModel):
    cart: Optional[CartResponse] = None
    is_loading: bool = False
    error: Optional[str] = None


class CartStore(Store[CartState]):
    """Cart snapshot. Every successful mutation is followed by a full re-fetch,
    so totals always come from the backend rather than a local patch."""

    def __init__(self, service: CartService):
        self.service = service
        super().__init__(CartState())

    async def fetch_cart(self) -> None:
        self.set(is_loading=True, error=None)
        try:
            cart = await self.service.get_cart()
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to fetch cart"), is_loading=False)
            return
        self.set(cart=cart, is_loading=False)

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> None:
        if quantity < 1:
            raise ClientValidationError("Quantity must be at least 1")
        self.set(is_loading=True, error=None)
        try:
            await self.service.add_to_cart(AddToCartRequest(product_id=product_id, quantity=quantity))
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to add to cart"), is_loading=False)
            raise
        await self.fetch_cart()

    async def update_quantity(self, product_id: int, quantity: int) -> None:
        if quantity < 1:
            raise ClientValidationError("Quantity must be at least 1")
        self.set(is_loading=True, error=None)
        try:
            await self.service.update_cart_item(product_id, quantity)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to update quantity"), is_loading=False)
            raise
        await self.fetch_cart()

    async def remove_item(self, product_id: int) -> None:
        self.set(is_loading=True, error=None)
        try:
            await self.service.remove_from_cart(product_id)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to remove item"), is_loading=False)
            raise
        await self.fetch_cart()

    async def clear_cart(self) -> None:
        self.set(is_loading=True, error=None)
        try:
            await self.service.clear_cart()
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to clear cart"), is_loading=False)
            raise
        await self.fetch_cart()
