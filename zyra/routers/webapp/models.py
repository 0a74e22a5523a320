"""
WebApp API Pydantic Models

Request bodies for the customer-facing endpoints.
"""
from typing import Optional

from pydantic import BaseModel, Field


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)
    size: Optional[str] = None
    color: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=0)  # 0 removes the line


# ==================== ADDRESS MODELS ====================

class AddressRequest(BaseModel):
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_default: bool = False


# ==================== CHECKOUT MODELS ====================

class PlaceOrderRequest(BaseModel):
    payment_method: str
    address_id: Optional[str] = None
    upi_id: Optional[str] = None
