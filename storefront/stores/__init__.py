from storefront.stores.admin import CategoryAdminStore, DashboardStore, OrderAdminStore, ProductAdminStore, ProductForm
from storefront.stores.auth import AuthStore
from storefront.stores.base import Store
from storefront.stores.cart import CartStore
from storefront.stores.order import OrderStore
from storefront.stores.product import ProductStore
from storefront.stores.review import ReviewStore

__all__ = [
    "AuthStore",
    "CartStore",
    "CategoryAdminStore",
    "DashboardStore",
    "OrderAdminStore",
    "OrderStore",
    "ProductAdminStore",
    "ProductForm",
    "ProductStore",
    "ReviewStore",
    "Store",
]
