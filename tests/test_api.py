"""Tests for API endpoints"""
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from api.index import app
from zyra.auth import get_owned_shop, verify_user
from zyra.cart import Cart
from zyra.errors import ERROR_CART_EMPTY, ERROR_PLACE_ORDER_FAILED
from zyra.orders import OrderStatusService
from zyra.services.models import Order, Shop


@pytest.fixture
def client():
    """Test client"""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login():
    """Authenticate requests as the given user."""

    def _login(user):
        app.dependency_overrides[verify_user] = lambda: user

    return _login


@pytest.fixture
def mock_db():
    return Mock()


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_requires_bearer_token(client):
    response = client.get("/api/webapp/cart")
    assert response.status_code == 401


# ==================== WEBAPP ====================

def test_list_shops(client, login, customer, mock_db):
    login(customer)
    mock_db.list_shops = AsyncMock(return_value=[{"id": "shop-1", "name": "Kala Threads"}])

    with patch("zyra.routers.webapp.shops.get_database", return_value=mock_db):
        response = client.get("/api/webapp/shops", params={"search": "kala"})

    assert response.status_code == 200
    assert response.json()["count"] == 1
    mock_db.list_shops.assert_awaited_once_with("user-123", "kala")


def test_follow_missing_shop(client, login, customer, mock_db):
    login(customer)
    mock_db.follow_shop = AsyncMock(side_effect=ValueError("Shop not found"))

    with patch("zyra.routers.webapp.shops.get_database", return_value=mock_db):
        response = client.post("/api/webapp/shops/nope/follow")

    assert response.status_code == 404


def test_pending_shop_hidden_from_customers(client, login, customer, mock_db, sample_shop):
    login(customer)
    mock_db.get_shop = AsyncMock(return_value={"shop": {**sample_shop, "is_active": False}, "products": []})

    with patch("zyra.routers.webapp.shops.get_database", return_value=mock_db):
        response = client.get("/api/webapp/shops/shop-1")

    assert response.status_code == 404


def test_pending_shop_visible_to_owner(client, login, shop_owner, mock_db, sample_shop):
    login(shop_owner)
    mock_db.get_shop = AsyncMock(return_value={"shop": {**sample_shop, "is_active": False}, "products": []})

    with patch("zyra.routers.webapp.shops.get_database", return_value=mock_db):
        response = client.get("/api/webapp/shops/shop-1")

    assert response.status_code == 200
    assert response.json()["shop"]["id"] == "shop-1"


def test_update_unknown_cart_line(client, login, customer, mock_db):
    login(customer)
    mock_db.cart.update_item_quantity = AsyncMock(side_effect=LookupError("Cart item not found"))

    with patch("zyra.routers.webapp.cart.get_database", return_value=mock_db):
        response = client.patch("/api/webapp/cart/items/nope", json={"quantity": 2})

    assert response.status_code == 404
    assert response.json()["detail"] == "Cart item not found"


def test_get_cart(client, login, customer, mock_db, make_cart_row):
    login(customer)
    cart = Cart.from_rows("user-123", [make_cart_row("c1", "p1", "shop-1", "120.00", 2)])
    mock_db.cart.get_cart = AsyncMock(return_value=cart)

    with patch("zyra.routers.webapp.cart.get_database", return_value=mock_db):
        response = client.get("/api/webapp/cart")

    assert response.status_code == 200
    assert response.json()["total"] == 240.0


def test_add_to_cart_rejects_zero_quantity(client, login, customer):
    login(customer)

    response = client.post("/api/webapp/cart/items", json={"product_id": "p1", "quantity": 0})

    assert response.status_code == 422


def test_place_order(client, login, customer, mock_db):
    login(customer)
    mock_db.place_order = AsyncMock(
        return_value=[
            Order(id="o1", order_number="ZY1", shop_id="shop-a", total_amount="100.00"),
            Order(id="o2", order_number="ZY2", shop_id="shop-b", total_amount="50.50"),
        ]
    )

    with patch("zyra.routers.webapp.checkout.get_database", return_value=mock_db):
        response = client.post(
            "/api/webapp/checkout/place-order",
            json={"payment_method": "upi", "upi_id": "asha@okaxis"},
        )

    assert response.status_code == 201
    body = response.json()
    assert [o["id"] for o in body["orders"]] == ["o1", "o2"]
    assert body["total_amount"] == 150.5
    mock_db.place_order.assert_awaited_once_with(customer, "upi", address_id=None, upi_id="asha@okaxis")


def test_place_order_empty_cart(client, login, customer, mock_db):
    login(customer)
    mock_db.place_order = AsyncMock(side_effect=ValueError(ERROR_CART_EMPTY))

    with patch("zyra.routers.webapp.checkout.get_database", return_value=mock_db):
        response = client.post("/api/webapp/checkout/place-order", json={"payment_method": "cod"})

    assert response.status_code == 400
    assert response.json()["detail"] == ERROR_CART_EMPTY


def test_place_order_unexpected_failure(client, login, customer, mock_db):
    login(customer)
    mock_db.place_order = AsyncMock(side_effect=RuntimeError("connection reset"))

    with patch("zyra.routers.webapp.checkout.get_database", return_value=mock_db):
        response = client.post("/api/webapp/checkout/place-order", json={"payment_method": "cod"})

    assert response.status_code == 500
    assert response.json()["detail"] == ERROR_PLACE_ORDER_FAILED


def test_order_details_hidden_from_other_customers(client, login, customer, mock_db, sample_order):
    login(customer)
    mock_db.get_order_detail = AsyncMock(return_value={**sample_order, "user_id": "someone-else"})

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db):
        response = client.get("/api/webapp/orders/order-1")

    assert response.status_code == 403


def test_order_details(client, login, customer, mock_db, sample_order):
    login(customer)
    mock_db.get_order_detail = AsyncMock(return_value={**sample_order, "order_items": []})

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db):
        response = client.get("/api/webapp/orders/order-1")

    assert response.status_code == 200
    body = response.json()
    assert body["order"]["order_number"] == "ZY250101-ABC123"
    assert body["map"]["center"] == [12.97, 77.6]
    assert body["delivery"]["estimated_delivery"] == "2025-01-02T10:00:00+00:00"


def test_active_order_countdown(client, login, customer, mock_db, sample_order):
    login(customer)
    mock_db.get_latest_order_for_product = AsyncMock(return_value=sample_order)

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db):
        response = client.get("/api/webapp/orders/active", params={"product_id": "product-1"})

    active = response.json()["active_order"]
    assert response.status_code == 200
    assert active["order_id"] == "order-1"
    assert active["estimated_delivery"] == "2025-01-02T10:00:00+00:00"
    assert active["time_left"] == "Arriving soon"


def test_no_active_order_once_delivered(client, login, customer, mock_db, sample_order):
    login(customer)
    mock_db.get_latest_order_for_product = AsyncMock(return_value={**sample_order, "status": "delivered"})

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db):
        response = client.get("/api/webapp/orders/active", params={"product_id": "product-1"})

    assert response.json()["active_order"] is None


def test_verify_order_twice(client, login, customer, mock_db, sample_order):
    login(customer)
    delivered = Order(**{**sample_order, "status": "delivered"})
    mock_db.verify_order = AsyncMock(return_value=(delivered, True))

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db):
        response = client.post("/api/webapp/verify-order/order-1")

    assert response.status_code == 200
    assert response.json()["already_delivered"] is True


def test_verify_pending_order(client, login, customer, mock_db, sample_order):
    login(customer)
    repo = Mock()
    repo.get_by_id = AsyncMock(return_value=Order(**sample_order))
    repo.update = AsyncMock(side_effect=lambda order_id, data: [{**sample_order, **data}])
    mock_db.verify_order = OrderStatusService(repo).verify_delivery

    with patch("zyra.routers.webapp.orders.get_database", return_value=mock_db), patch(
        "zyra.orders.status_service.emit_order_status_change", new_callable=AsyncMock
    ):
        response = client.post("/api/webapp/verify-order/order-1")

    assert response.status_code == 200
    assert response.json()["status"] == "delivered"
    assert response.json()["already_delivered"] is False


# ==================== SHOP ====================

@pytest.fixture
def owned_shop(sample_shop):
    shop = Shop(**sample_shop)
    app.dependency_overrides[get_owned_shop] = lambda: shop
    return shop


def test_shop_setup_requires_shop_owner(client, login, customer):
    login(customer)

    response = client.post("/api/shop/setup", json={"name": "Kala", "latitude": 17.4, "longitude": 78.5})

    assert response.status_code == 403


def test_shop_setup_without_location(client, login, shop_owner, mock_db):
    login(shop_owner)
    mock_db.create_shop = AsyncMock(side_effect=ValueError("Please pin your shop location on the map"))

    with patch("zyra.routers.shop.profile.get_database", return_value=mock_db):
        response = client.post("/api/shop/setup", json={"name": "Kala"})

    assert response.status_code == 400


def test_shop_orders_grouped_with_qr(client, owned_shop, mock_db, sample_order):
    mock_db.get_shop_order_items = AsyncMock(
        return_value=[
            {"id": "i1", "order_id": "order-1", "quantity": 1, "price": "799.00", "orders": sample_order},
            {"id": "i2", "order_id": "order-1", "quantity": 1, "price": "799.00", "orders": sample_order},
        ]
    )

    with patch("zyra.routers.shop.orders.get_database", return_value=mock_db):
        response = client.get("/api/shop/orders")

    assert response.status_code == 200
    orders = response.json()["orders"]
    assert len(orders) == 1
    assert len(orders[0]["items"]) == 2
    assert '"orderNumber": "ZY250101-ABC123"' in orders[0]["qr_payload"]
    assert orders[0]["verification_url"].endswith("/verify-order/order-1")


def test_shop_order_detail_map(client, owned_shop, mock_db, sample_order, sample_shop):
    mock_db.get_order_detail = AsyncMock(return_value={**sample_order, "shops": sample_shop, "order_items": []})

    with patch("zyra.routers.shop.orders.get_database", return_value=mock_db):
        response = client.get("/api/shop/orders/order-1")

    assert response.status_code == 200
    delivery_map = response.json()["map"]
    assert delivery_map["center"] == [17.4, 78.5]
    assert len(delivery_map["markers"]) == 2
    assert delivery_map["distance_km"] > 0


def test_shop_cannot_update_foreign_order(client, owned_shop, mock_db, sample_order):
    mock_db.get_order_detail = AsyncMock(return_value={**sample_order, "shop_id": "shop-2"})
    mock_db.update_order_status = AsyncMock()

    with patch("zyra.routers.shop.orders.get_database", return_value=mock_db):
        response = client.patch("/api/shop/orders/order-1/status", json={"status": "packed"})

    assert response.status_code == 404
    mock_db.update_order_status.assert_not_called()


def test_shop_invalid_transition(client, owned_shop, mock_db, sample_order):
    mock_db.get_order_detail = AsyncMock(return_value=sample_order)
    mock_db.update_order_status = AsyncMock(
        side_effect=ValueError("Cannot transition from 'pending' to 'delivered'")
    )

    with patch("zyra.routers.shop.orders.get_database", return_value=mock_db):
        response = client.patch("/api/shop/orders/order-1/status", json={"status": "delivered"})

    assert response.status_code == 400


def test_shop_revenue(client, owned_shop, mock_db):
    mock_db.get_shop_revenue = AsyncMock(return_value={"total_revenue": 10.0})

    with patch("zyra.routers.shop.revenue.get_database", return_value=mock_db):
        response = client.get("/api/shop/revenue")

    assert response.status_code == 200
    mock_db.get_shop_revenue.assert_awaited_once_with("shop-1")


# ==================== ADMIN ====================

def test_admin_routes_reject_customers(client, login, customer):
    login(customer)

    response = client.get("/api/admin/orders")

    assert response.status_code == 403


def test_admin_shop_filter_validated(client, login, admin):
    login(admin)

    response = client.get("/api/admin/shops", params={"status": "archived"})

    assert response.status_code == 400


def test_admin_approve_shop(client, login, admin, mock_db, sample_shop):
    login(admin)
    mock_db.set_shop_active = AsyncMock(return_value=Shop(**sample_shop))

    with patch("zyra.routers.admin.shops.get_database", return_value=mock_db), patch(
        "zyra.routers.admin.shops.emit_shop_update", new_callable=AsyncMock
    ) as emit:
        response = client.patch("/api/admin/shops/shop-1/status", json={"is_active": True})

    assert response.status_code == 200
    mock_db.set_shop_active.assert_awaited_once_with("shop-1", True)
    emit.assert_awaited_once_with("shop-1", True)


def test_admin_status_override(client, login, admin, mock_db, sample_order):
    login(admin)
    mock_db.update_order_status = AsyncMock(return_value=Order(**{**sample_order, "status": "pending"}))

    with patch("zyra.routers.admin.orders.get_database", return_value=mock_db):
        response = client.patch("/api/admin/orders/order-1/status", json={"status": "pending"})

    assert response.status_code == 200
    mock_db.update_order_status.assert_awaited_once_with("order-1", "pending", check_transition=False)


def test_admin_set_role(client, login, admin, mock_db):
    login(admin)
    mock_db.set_user_role = AsyncMock(return_value={"user_id": "u1", "role": "shop_owner"})

    with patch("zyra.routers.admin.users.get_database", return_value=mock_db):
        response = client.put("/api/admin/users/u1/role", json={"role": "shop_owner"})

    assert response.status_code == 200
    assert response.json()["role"] == "shop_owner"


def test_admin_set_unknown_role(client, login, admin):
    login(admin)

    response = client.put("/api/admin/users/u1/role", json={"role": "superuser"})

    assert response.status_code == 422


def test_admin_stats(client, login, admin, mock_db):
    login(admin)
    mock_db.count_shops = AsyncMock(side_effect=lambda is_active=None: 2 if is_active is False else 10)
    mock_db.count_orders_by_status = AsyncMock(return_value=3)

    with patch("zyra.routers.admin.users.get_database", return_value=mock_db):
        response = client.get("/api/admin/stats")

    body = response.json()
    assert response.status_code == 200
    assert body["total_shops"] == 10
    assert body["pending_shops"] == 2
    assert body["active_shops"] == 8
    assert body["total_orders"] == 15
