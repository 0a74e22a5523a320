"""Database Models - Pydantic models for all entities."""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from zyra.services.money import to_decimal as _to_decimal


class AppRole(str, Enum):
    CUSTOMER = "customer"
    SHOP_OWNER = "shop_owner"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PACKED = "packed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    COD = "cod"
    UPI = "upi"


class AuthUser(BaseModel):
    """Authenticated caller (Supabase Auth user + app role)."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: AppRole = AppRole.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role == AppRole.ADMIN


class Shop(BaseModel):
    """Shop model."""
    id: str
    owner_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    rating: float = 0
    is_active: bool = False
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, v):
        return v or 0


class Product(BaseModel):
    """Product model."""
    id: str
    shop_id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = None  # None = not tracked
    sizes: list[str] = []
    colors: list[str] = []
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("compare_at_price", mode="before")
    @classmethod
    def convert_compare_to_decimal(cls, v):
        return _to_decimal(v) if v is not None else None

    @field_validator("sizes", "colors", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return v or []

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity is None or self.stock_quantity >= quantity


class Address(BaseModel):
    """Saved delivery address."""
    id: str
    user_id: str
    full_name: str
    phone: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_default: bool = False
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class Order(BaseModel):
    """Order model (one row per shop per checkout)."""
    id: str
    order_number: Optional[str] = None
    user_id: Optional[str] = None
    shop_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    total_amount: Decimal = Decimal("0")
    status: str = OrderStatus.PENDING.value
    payment_method: Optional[str] = None
    delivery_address: Optional[str] = None
    delivery_latitude: Optional[float] = None
    delivery_longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("delivery_latitude", "delivery_longitude", mode="before")
    @classmethod
    def blank_coordinate_to_none(cls, v):
        # Coordinates arrive as numeric strings or "" from older rows
        if v in ("", None):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None
