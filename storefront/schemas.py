"""
API Schemas for the JStore client

Each Pydantic model mirrors a JSON payload exchanged with the store backend.
Attributes are snake_case in Python and camelCase on the wire:
- Product.category_id <-> "categoryId"
- Page.total_elements <-> "totalElements"

Response models ignore keys they do not know (e.g. Spring's "pageable").
"""
import mimetypes
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

ROLE_CUSTOMER = "ROLE_CUSTOMER"
ROLE_STAFF = "ROLE_STAFF"
ROLE_ADMIN = "ROLE_ADMIN"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MediaType(str, Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# Users & auth

class Role(CamelModel):
    id: int
    name: str = Field(..., description="ROLE_CUSTOMER | ROLE_STAFF | ROLE_ADMIN")


class User(CamelModel):
    id: int
    username: str
    email: EmailStr
    roles: List[str] = Field(default_factory=list, description="Role names")

    @field_validator("roles", mode="before")
    @classmethod
    def flatten_roles(cls, value: Any) -> Any:
        # nested payloads carry {id, name} role objects
        if isinstance(value, list):
            return [r.get("name") if isinstance(r, dict) else r for r in value]
        return value

    def has_role(self, role: str) -> bool:
        return role in self.roles


class LoginRequest(CamelModel):
    username: str
    password: str


class RegisterRequest(CamelModel):
    username: str
    password: str
    email: EmailStr


class AuthResponse(CamelModel):
    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    roles: List[str] = Field(default_factory=list)

    def to_user(self) -> User:
        return User(id=self.id, username=self.username, email=self.email, roles=self.roles)


class MessageResponse(CamelModel):
    message: str


# Catalog

class Category(CamelModel):
    id: int
    name: str
    description: Optional[str] = None


class Product(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float = Field(..., ge=0, description="Unit price")
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    image_url: Optional[str] = Field(None, description="Legacy single image")
    created_at: Optional[datetime] = None

    @property
    def display_price(self) -> str:
        return format_price(self.price)


class ProductMedia(CamelModel):
    id: int
    product_id: int
    media_type: MediaType
    url: str
    alt_text: Optional[str] = None
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SelectedFile(BaseModel):
    """A local file picked for upload."""
    name: str
    content_type: str = Field(..., description="MIME type, e.g. image/png")
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path, content_type: Optional[str] = None) -> "SelectedFile":
        path = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content_type=content_type, data=path.read_bytes())


class Inventory(CamelModel):
    id: Optional[int] = None
    product_id: int
    quantity: int
    last_updated: Optional[datetime] = None


class ProductSearchParams(CamelModel):
    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1)
    sort: str = "name,asc"
    name: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    category_id: Optional[int] = None


class ProductPayload(CamelModel):
    """Body of the admin create/update product calls."""
    name: str
    description: Optional[str] = None
    price: float = Field(..., gt=0)
    category_id: int
    image_url: Optional[str] = None


class CategoryPayload(CamelModel):
    name: str


# Cart

class CartItem(CamelModel):
    id: int
    product: Product
    quantity: int
    subtotal: float


class Cart(CamelModel):
    id: int
    items: List[CartItem] = Field(default_factory=list)


class CartResponse(CamelModel):
    cart: Cart
    item_count: int = 0
    total: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.cart.items


class AddToCartRequest(CamelModel):
    product_id: int
    quantity: int = Field(1, ge=1)


# Orders

class OrderItem(CamelModel):
    id: int
    product: Product
    quantity: int
    price: float = Field(..., description="Unit price at purchase time")
    subtotal: float


class Order(CamelModel):
    id: int
    user: Optional[User] = None
    shipping_address: str
    total_price: float
    status: OrderStatus
    created_at: Optional[datetime] = None
    items: List[OrderItem] = Field(default_factory=list)

    @property
    def can_cancel(self) -> bool:
        return self.status == OrderStatus.PENDING


class CheckoutRequest(CamelModel):
    shipping_address: str
    voucher_code: Optional[str] = None


# Reviews

class Review(CamelModel):
    id: int
    user: User
    product: Optional[Product] = None
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    is_verified_purchase: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateReviewRequest(CamelModel):
    product_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ProductRating(CamelModel):
    average_rating: float = 0.0
    total_reviews: int = 0


# Envelopes

class Page(CamelModel, Generic[T]):
    """Spring Data page envelope, zero-based."""
    content: List[T] = Field(default_factory=list)
    number: int = 0
    size: int = 0
    total_pages: int = 0
    total_elements: int = 0
    number_of_elements: int = 0
    first: bool = True
    last: bool = True
    empty: bool = True


class ApiError(CamelModel):
    path: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None
    timestamp: Any = None
    status: Optional[int] = None


def format_price(amount: float) -> str:
    return f"${amount:.2f}"
