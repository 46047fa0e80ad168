import httpx

from storefront.api import send
from storefront.schemas import AddToCartRequest, CartItem, CartResponse


class CartService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_cart(self) -> CartResponse:
        return CartResponse.model_validate(await send(self.client, "GET", "/api/cart"))

    async def add_to_cart(self, data: AddToCartRequest) -> CartItem:
        body = await send(self.client, "POST", "/api/cart/items", json=data.to_payload())
        return CartItem.model_validate(body)

    async def update_cart_item(self, product_id: int, quantity: int) -> CartItem:
        body = await send(self.client, "PUT", f"/api/cart/items/{product_id}", params={"quantity": quantity})
        return CartItem.model_validate(body)

    async def remove_from_cart(self, product_id: int) -> None:
        await send(self.client, "DELETE", f"/api/cart/items/{product_id}")

    async def clear_cart(self) -> None:
        await send(self.client, "DELETE", "/api/cart")
