"""Pytest configuration and fixtures"""
import os
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("WEBAPP_URL", "https://zyra.test")

_CHAIN_METHODS = (
    "select",
    "insert",
    "update",
    "delete",
    "upsert",
    "eq",
    "neq",
    "in_",
    "is_",
    "ilike",
    "order",
    "limit",
    "range",
    "gte",
    "lte",
)


def make_table_mock(data=None, count=None):
    """Chainable query builder whose execute() resolves to a response with `data`."""
    table = Mock()
    for name in _CHAIN_METHODS:
        getattr(table, name).return_value = table
    table.execute = AsyncMock(return_value=Mock(data=data if data is not None else [], count=count))
    return table


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client"""
    client = Mock()
    client.table.return_value = make_table_mock()
    client.auth = Mock()
    client.auth.get_user = AsyncMock()
    client.auth.sign_out = AsyncMock()
    return client


@pytest.fixture
def mock_redis():
    """Mock Upstash Redis client"""
    redis = Mock()
    redis.xadd = AsyncMock(return_value="1-0")
    redis.xrange = AsyncMock(return_value=[])
    return redis


@pytest.fixture
def customer():
    from zyra.services.models import AppRole, AuthUser

    return AuthUser(id="user-123", email="asha@example.com", full_name="Asha", role=AppRole.CUSTOMER)


@pytest.fixture
def shop_owner():
    from zyra.services.models import AppRole, AuthUser

    return AuthUser(id="owner-1", email="owner@example.com", role=AppRole.SHOP_OWNER)


@pytest.fixture
def admin():
    from zyra.services.models import AppRole, AuthUser

    return AuthUser(id="admin-1", email="admin@example.com", role=AppRole.ADMIN)


@pytest.fixture
def sample_shop():
    """Sample shop row"""
    return {
        "id": "shop-1",
        "owner_id": "owner-1",
        "name": "Kala Threads",
        "description": "Handloom sarees",
        "phone": "9876543210",
        "email": "kala@example.com",
        "address": "MG Road, Hyderabad",
        "latitude": 17.4,
        "longitude": 78.5,
        "logo_url": None,
        "rating": None,
        "is_active": True,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_product():
    """Sample product row"""
    return {
        "id": "product-1",
        "shop_id": "shop-1",
        "name": "Cotton Kurta",
        "description": "Hand-block printed",
        "price": "799.00",
        "compare_at_price": "999.00",
        "category": "clothing",
        "image_url": None,
        "stock_quantity": 5,
        "sizes": ["S", "M", "L"],
        "colors": None,
        "is_active": True,
    }


@pytest.fixture
def sample_address():
    """Sample address row"""
    return {
        "id": "addr-1",
        "user_id": "user-123",
        "full_name": "Asha Rao",
        "phone": "9000000001",
        "address_line1": "12 Residency Road",
        "address_line2": None,
        "city": "Bengaluru",
        "state": "Karnataka",
        "postal_code": "560025",
        "latitude": 12.97,
        "longitude": 77.6,
        "is_default": True,
    }


@pytest.fixture
def sample_order():
    """Sample order row"""
    return {
        "id": "order-1",
        "order_number": "ZY250101-ABC123",
        "user_id": "user-123",
        "shop_id": "shop-1",
        "customer_name": "Asha Rao",
        "customer_phone": "9000000001",
        "customer_email": "asha@example.com",
        "total_amount": "1598.00",
        "status": "pending",
        "payment_method": "cod",
        "delivery_address": "Asha Rao, 12 Residency Road, Bengaluru, Karnataka - 560025, Phone: 9000000001",
        "delivery_latitude": "12.97",
        "delivery_longitude": "77.6",
        "created_at": "2025-01-01T10:00:00+00:00",
        "updated_at": None,
    }


def cart_row(item_id, product_id, shop_id, price, quantity, stock=None, size=None, color=None):
    """cart_items row with its embedded product, as returned by CartRepository."""
    return {
        "id": item_id,
        "user_id": "user-123",
        "product_id": product_id,
        "quantity": quantity,
        "size": size,
        "color": color,
        "products": {
            "name": f"Product {product_id}",
            "price": price,
            "image_url": None,
            "category": "clothing",
            "shop_id": shop_id,
            "stock_quantity": stock,
            "is_active": True,
        },
    }


@pytest.fixture
def make_cart_row():
    return cart_row
