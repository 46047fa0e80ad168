import httpx

from storefront.api import send
from storefront.schemas import CheckoutRequest, Order, OrderStatus, Page


class OrderService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def checkout(self, data: CheckoutRequest) -> Order:
        body = await send(self.client, "POST", "/api/orders/checkout", json=data.to_payload())
        return Order.model_validate(body)

    async def get_order_history(self, page: int = 0, size: int = 10) -> Page[Order]:
        body = await send(self.client, "GET", "/api/orders", params={"page": page, "size": size})
        return Page[Order].model_validate(body)

    async def get_my_orders(self, page: int = 0, size: int = 10) -> Page[Order]:
        return await self.get_order_history(page, size)

    async def get_order_by_id(self, order_id: int) -> Order:
        return Order.model_validate(await send(self.client, "GET", f"/api/orders/{order_id}"))

    async def cancel_order(self, order_id: int) -> Order:
        return Order.model_validate(await send(self.client, "POST", f"/api/orders/{order_id}/cancel"))

    # Admin endpoints

    async def get_all_orders(self, page: int = 0, size: int = 20) -> Page[Order]:
        body = await send(self.client, "GET", "/api/admin/orders", params={"page": page, "size": size})
        return Page[Order].model_validate(body)

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        body = await send(
            self.client, "PUT", f"/api/admin/orders/{order_id}/status", params={"status": OrderStatus(status).value}
        )
        return Order.model_validate(body)
