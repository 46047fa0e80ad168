from storefront import Storefront
from storefront.session import TOKEN_KEY, FileStorage


async def test_session_file_used_by_default(settings, transport, backend):
    async with Storefront(settings, transport=transport) as shop:
        assert isinstance(shop.storage, FileStorage)
        await shop.auth.login("alice", "password")

    async with Storefront(settings, transport=transport) as shop:
        assert shop.storage.get_item(TOKEN_KEY)
        assert shop.auth.state.is_authenticated
        await shop.cart.fetch_cart()
        assert shop.cart.state.error is None


async def test_stores_are_not_shared(settings, storage, transport, backend):
    async with Storefront(settings, storage, transport=transport) as one, \
            Storefront(settings, storage, transport=transport) as two:
        await one.products.fetch_products()
        assert one.products.state.products
        assert two.products.state.products == []
        assert one.products.state.pagination.page_size == settings.page_size
