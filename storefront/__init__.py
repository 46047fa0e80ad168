"""Client state and service layer for the JStore e-commerce API."""

from storefront.client import Storefront

__all__ = ["Storefront"]
