from storefront.services.auth import AuthService
from storefront.services.cart import CartService
from storefront.services.media import MediaService
from storefront.services.order import OrderService
from storefront.services.product import ProductService
from storefront.services.review import ReviewService

__all__ = [
    "AuthService",
    "CartService",
    "MediaService",
    "OrderService",
    "ProductService",
    "ReviewService",
]
