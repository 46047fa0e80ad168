import httpx
import pytest

from storefront.errors import ClientValidationError
from storefront.stores import ProductForm


def form(**overrides):
    values = dict(name="Tablet", description="10 inch", price=299.0, category_id=1, stock_quantity=7)
    values.update(overrides)
    return ProductForm(**values)


# Categories

async def test_category_crud_reloads(admin):
    store = admin.admin_categories
    created = await store.create("  Toys ")
    assert created.name == "Toys"
    assert "Toys" in [c.name for c in store.state.categories]

    await store.update(created.id, "Games")
    assert "Games" in [c.name for c in store.state.categories]

    await store.delete(created.id)
    assert created.id not in [c.id for c in store.state.categories]


async def test_category_name_required(admin, backend):
    backend.requests.clear()
    with pytest.raises(ClientValidationError, match="Category name is required"):
        await admin.admin_categories.create("   ")
    assert backend.requests == []


async def test_category_in_use_cannot_be_deleted(admin):
    await admin.admin_categories.load()
    with pytest.raises(httpx.HTTPStatusError):
        await admin.admin_categories.delete(1)

    assert admin.admin_categories.state.error == "Cannot delete category that has products"
    assert len(admin.admin_categories.state.categories) == 2


async def test_customer_is_forbidden(customer):
    with pytest.raises(httpx.HTTPStatusError) as info:
        await customer.admin_categories.create("Toys")
    assert info.value.response.status_code == 403
    assert customer.admin_categories.state.error == "Access Denied"


# Product form

@pytest.mark.parametrize(
    "overrides, message",
    [
        (dict(name=" "), "Product name is required"),
        (dict(price=None), "Valid price is required"),
        (dict(price=0), "Valid price is required"),
        (dict(category_id=None), "Category is required"),
        (dict(stock_quantity=None), "Valid stock quantity is required"),
        (dict(stock_quantity=-1), "Valid stock quantity is required"),
        (dict(name="", price=0), "Product name is required"),
    ],
)
def test_product_form_validation(overrides, message):
    with pytest.raises(ClientValidationError) as info:
        form(**overrides).to_payload()
    assert info.value.message == message


def test_product_form_payload():
    payload = form(image_url="  ").to_payload()
    assert payload.to_payload() == {"name": "Tablet", "description": "10 inch", "price": 299.0, "categoryId": 1}


# Products

async def test_create_sets_stock(admin, backend):
    backend.requests.clear()
    product = await admin.admin_products.save(form())

    assert product.category_name == "Electronics"
    assert backend.stock[product.id] == 7
    assert backend.requests == ["POST /api/admin/products", f"PUT /api/admin/products/{product.id}/inventory"]


async def test_update_skips_unchanged_stock(admin, backend):
    loaded = await admin.admin_products.load_form(2)
    assert loaded.stock_quantity == 25
    assert loaded.name == "Headphones"
    backend.requests.clear()

    await admin.admin_products.save(loaded.model_copy(update={"price": 49.0}), product_id=2)

    assert backend.products[2]["price"] == 49.0
    assert "PUT /api/admin/products/2/inventory" not in backend.requests


async def test_update_changes_stock(admin, backend):
    loaded = await admin.admin_products.load_form(2)
    await admin.admin_products.save(loaded.model_copy(update={"stock_quantity": 5}), product_id=2)

    assert backend.requests[-1] == "PUT /api/admin/products/2/inventory"
    assert backend.stock[2] == 5


async def test_invalid_form_not_sent(admin, backend):
    backend.requests.clear()
    with pytest.raises(ClientValidationError):
        await admin.admin_products.save(form(category_id=None))
    assert admin.admin_products.state.error == "Category is required"
    assert backend.requests == []


async def test_save_failure_message(admin):
    with pytest.raises(httpx.HTTPStatusError):
        await admin.admin_products.save(form(), product_id=999)
    assert admin.admin_products.state.error == "Product not found with id: 999"
    assert not admin.admin_products.state.is_submitting


async def test_search_and_delete(admin):
    store = admin.admin_products
    await store.search("book")
    assert store.state.search_term == "book"
    assert [p.name for p in store.state.products] == ["Python Cookbook", "Rust Book"]

    await store.search("  ")
    assert store.state.search_term == ""
    assert store.state.pagination.total_items == 5

    await store.delete(5)
    assert store.state.pagination.total_items == 4


async def test_stock_adjustments(admin):
    service = admin.product_service
    assert (await service.add_stock(3, 4)).quantity == 7
    assert (await service.remove_stock(3, 2)).quantity == 5
    with pytest.raises(httpx.HTTPStatusError):
        await service.remove_stock(3, 50)


async def test_admin_paging(admin):
    admin.admin_products.page_size = 2
    await admin.admin_products.fetch_products()
    await admin.admin_products.go_to_page(2)
    assert admin.admin_products.state.pagination.current_page == 2
    assert [p.name for p in admin.admin_products.state.products] == ["Rust Book"]


# Dashboard

async def test_dashboard_counts(admin):
    await admin.cart.add_to_cart(1)
    await admin.orders.checkout("HQ", admin.cart.state.cart)

    await admin.dashboard.load_stats()

    assert admin.dashboard.state.total_products == 5
    assert admin.dashboard.state.total_orders == 1
    assert not admin.dashboard.state.is_loading


async def test_dashboard_failure_keeps_counts(customer):
    await customer.dashboard.load_stats()
    assert customer.dashboard.state.total_orders == 0
    assert not customer.dashboard.state.is_loading
