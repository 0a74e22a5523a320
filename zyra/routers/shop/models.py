"""
Shop API Pydantic Models

Request bodies for the shop-owner endpoints.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ShopSetupRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    # Required, but checked by the service so the client gets the map hint
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ShopUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    compare_at_price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    sizes: list[str] = []
    colors: list[str] = []
    is_active: bool = True


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    compare_at_price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    sizes: Optional[list[str]] = None
    colors: Optional[list[str]] = None
    is_active: Optional[bool] = None


class OrderStatusRequest(BaseModel):
    status: str
