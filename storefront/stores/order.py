import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from storefront.errors import ClientValidationError, error_message
from storefront.pagination import Pagination
from storefront.schemas import CartResponse, CheckoutRequest, Order
from storefront.services.order import OrderService
from storefront.stores.base import Store

logger = logging.getLogger(__name__)


class OrderState(BaseModel):
    orders: List[Order] = []
    pagination: Pagination = Pagination(page_size=10)
    is_loading: bool = False
    is_submitting: bool = False
    error: Optional[str] = None


class OrderStore(Store[OrderState]):
    """Order history and checkout for the signed-in customer."""

    def __init__(self, service: OrderService, page_size: int = 10):
        self.service = service
        self.page_size = page_size
        super().__init__(OrderState(pagination=Pagination(page_size=page_size)))

    async def fetch_orders(self, page: int = 0, size: Optional[int] = None) -> None:
        self.set(is_loading=True, error=None)
        try:
            result = await self.service.get_my_orders(page, size or self.page_size)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to fetch orders"), is_loading=False)
            return
        self.set(orders=result.content, pagination=Pagination.from_page(result), is_loading=False)

    async def go_to_page(self, page: int) -> None:
        self.state.pagination.check_page(page)
        await self.fetch_orders(page, self.state.pagination.page_size)

    async def cancel_order(self, order_id: int) -> Order:
        """Ask the backend to cancel, then reload the page being shown.

        The backend decides whether the transition is allowed; a rejection is
        stored in ``error`` and re-raised for the caller to alert on.
        """
        try:
            order = await self.service.cancel_order(order_id)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to cancel order"))
            raise
        logger.info("Order %s cancelled", order_id)
        await self.fetch_orders(self.state.pagination.current_page, self.state.pagination.page_size)
        return order

    async def checkout(
        self, shipping_address: str, cart: Optional[CartResponse], voucher_code: Optional[str] = None
    ) -> Order:
        """Place an order for the current cart.

        Nothing local is cleared afterwards; the caller decides where to go next
        and re-fetches the cart if it needs to.
        """
        self.set(error=None)
        if not shipping_address.strip():
            self.set(error="Please enter a shipping address")
            raise ClientValidationError("Please enter a shipping address")
        if cart is None or cart.is_empty:
            self.set(error="Your cart is empty")
            raise ClientValidationError("Your cart is empty")
        self.set(is_submitting=True)
        data = CheckoutRequest(shipping_address=shipping_address.strip(), voucher_code=voucher_code or None)
        try:
            order = await self.service.checkout(data)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Failed to place order"), is_submitting=False)
            raise
        self.set(is_submitting=False)
        logger.info("Order %s placed", order.id)
        return order
