"""Tests for catalog, address, user and revenue domains"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from postgrest.exceptions import APIError

from zyra.errors import (
    ERROR_ADDRESS_NOT_FOUND,
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_SHOP_ALREADY_EXISTS,
    ERROR_SHOP_LOCATION_REQUIRED,
    ERROR_SHOP_NOT_FOUND,
)
from zyra.services.domains import AddressesDomain, CatalogDomain, UsersDomain
from zyra.services.domains.addresses import format_delivery_address, pick_checkout_address
from zyra.services.domains.revenue import summarize_revenue
from zyra.services.models import Address, AppRole, Order, Product, Shop


@pytest.fixture
def catalog(sample_shop):
    shops = Mock()
    shops.get_by_id = AsyncMock(return_value=Shop(**sample_shop))
    shops.get_by_owner = AsyncMock(return_value=None)
    shops.list_active = AsyncMock(return_value=[])
    shops.create = AsyncMock(side_effect=lambda data: Shop(id="shop-new", **data))
    shops.update = AsyncMock(return_value=Shop(**sample_shop))

    followers = Mock()
    followers.count_for_shop = AsyncMock(return_value=3)
    followers.shop_ids_for = AsyncMock(return_value=[])
    followers.followed_by = AsyncMock(return_value=set())
    followers.is_following = AsyncMock(return_value=False)
    followers.add = AsyncMock()
    followers.remove = AsyncMock()

    products = Mock()
    products.shop_ids_for = AsyncMock(return_value=[])
    products.list_by_shop = AsyncMock(return_value=[])
    products.get_by_id = AsyncMock(return_value=None)
    products.update = AsyncMock(return_value=None)
    products.delete = AsyncMock()

    return CatalogDomain(shops, followers, products)


class TestShops:
    @pytest.mark.asyncio
    async def test_list_shops_aggregates_counts(self, catalog, sample_shop):
        catalog.shops.list_active.return_value = [
            Shop(**sample_shop),
            Shop(**{**sample_shop, "id": "shop-2", "name": "Chai Corner", "description": None}),
        ]
        catalog.products.shop_ids_for.return_value = ["shop-1", "shop-1", "shop-2"]
        catalog.followers.shop_ids_for.return_value = ["shop-1"]
        catalog.followers.followed_by.return_value = {"shop-1"}

        cards = await catalog.list_shops("user-123", search="  kala ")

        catalog.shops.list_active.assert_awaited_once_with(search="kala")
        assert [(c["id"], c["products"], c["followers"], c["is_following"]) for c in cards] == [
            ("shop-1", 2, 1, True),
            ("shop-2", 1, 0, False),
        ]
        assert cards[0]["logo"] == "/placeholder.svg"
        assert cards[0]["rating"] == 0
        assert cards[1]["description"] == "No description available"

    @pytest.mark.asyncio
    async def test_list_shops_empty(self, catalog):
        assert await catalog.list_shops("user-123") == []
        catalog.products.shop_ids_for.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_shop(self, catalog):
        catalog.followers.is_following.return_value = True

        result = await catalog.get_shop("shop-1", "user-123")

        assert result["follower_count"] == 3
        assert result["is_following"] is True
        assert result["shop"]["name"] == "Kala Threads"

    @pytest.mark.asyncio
    async def test_follow(self, catalog):
        result = await catalog.follow("shop-1", "user-123")

        catalog.followers.add.assert_awaited_once_with("shop-1", "user-123")
        assert result == {"is_following": True, "follower_count": 3}

    @pytest.mark.asyncio
    async def test_follow_twice_is_success(self, catalog):
        catalog.followers.add.side_effect = APIError(
            {"message": "duplicate key value", "code": "23505", "hint": None, "details": None}
        )

        result = await catalog.follow("shop-1", "user-123")

        assert result["is_following"] is True

    @pytest.mark.asyncio
    async def test_follow_other_database_error(self, catalog):
        catalog.followers.add.side_effect = APIError(
            {"message": "permission denied", "code": "42501", "hint": None, "details": None}
        )

        with pytest.raises(APIError):
            await catalog.follow("shop-1", "user-123")

    @pytest.mark.asyncio
    async def test_follow_missing_shop(self, catalog):
        catalog.shops.get_by_id.return_value = None

        with pytest.raises(ValueError, match=ERROR_SHOP_NOT_FOUND):
            await catalog.follow("nope", "user-123")

    @pytest.mark.asyncio
    async def test_unfollow_never_negative(self, catalog):
        catalog.followers.count_for_shop.return_value = 0

        result = await catalog.unfollow("shop-1", "user-123")

        assert result == {"is_following": False, "follower_count": 0}


class TestShopSetup:
    data = {"name": " Kala Threads ", "latitude": "17.4", "longitude": "78.5"}

    @pytest.mark.asyncio
    async def test_created_inactive(self, catalog):
        shop = await catalog.create_shop("owner-1", self.data)

        row = catalog.shops.create.await_args.args[0]
        assert row["is_active"] is False
        assert row["name"] == "Kala Threads"
        assert (row["latitude"], row["longitude"]) == (17.4, 78.5)
        assert shop.is_active is False

    @pytest.mark.asyncio
    async def test_location_required(self, catalog):
        with pytest.raises(ValueError, match=ERROR_SHOP_LOCATION_REQUIRED):
            await catalog.create_shop("owner-1", {"name": "Kala", "latitude": None, "longitude": 78.5})

    @pytest.mark.asyncio
    async def test_coordinates_range_checked(self, catalog):
        with pytest.raises(ValueError):
            await catalog.create_shop("owner-1", {"name": "Kala", "latitude": 95, "longitude": 78.5})

    @pytest.mark.asyncio
    async def test_one_shop_per_owner(self, catalog, sample_shop):
        catalog.shops.get_by_owner.return_value = Shop(**sample_shop)

        with pytest.raises(ValueError, match=ERROR_SHOP_ALREADY_EXISTS):
            await catalog.create_shop("owner-1", self.data)

    @pytest.mark.asyncio
    async def test_owner_cannot_activate(self, catalog):
        await catalog.update_shop("shop-1", {"name": "New", "is_active": True, "owner_id": "x"})

        catalog.shops.update.assert_awaited_once_with("shop-1", {"name": "New"})


class TestProducts:
    @pytest.mark.asyncio
    async def test_update_other_shops_product(self, catalog, sample_product):
        catalog.products.get_by_id.return_value = Product(**{**sample_product, "shop_id": "shop-2"})

        with pytest.raises(ValueError, match=ERROR_PRODUCT_NOT_FOUND):
            await catalog.update_product("shop-1", "product-1", {"price": 10})

    @pytest.mark.asyncio
    async def test_update_clears_optional_columns(self, catalog, sample_product):
        catalog.products.get_by_id.return_value = Product(**sample_product)

        await catalog.update_product(
            "shop-1", "product-1", {"compare_at_price": None, "stock_quantity": None, "price": 699}
        )

        catalog.products.update.assert_awaited_once_with(
            "product-1", {"compare_at_price": None, "stock_quantity": None, "price": 699}
        )

    @pytest.mark.asyncio
    async def test_update_ignores_null_required_columns(self, catalog, sample_product):
        catalog.products.get_by_id.return_value = Product(**sample_product)

        product = await catalog.update_product("shop-1", "product-1", {"name": None, "price": None})

        catalog.products.update.assert_not_called()
        assert product.name == "Cotton Kurta"

    @pytest.mark.asyncio
    async def test_delete_own_product(self, catalog, sample_product):
        catalog.products.get_by_id.return_value = Product(**sample_product)

        await catalog.delete_product("shop-1", "product-1")

        catalog.products.delete.assert_awaited_once_with("product-1")


class TestAddresses:
    def make(self, sample_address, **overrides):
        return Address(**{**sample_address, **overrides})

    def test_format(self, sample_address):
        assert format_delivery_address(self.make(sample_address)) == (
            "Asha Rao, 12 Residency Road, Bengaluru, Karnataka - 560025, Phone: 9000000001"
        )

    def test_pick_requested_default_then_first(self, sample_address):
        first = self.make(sample_address, id="a1", is_default=False)
        default = self.make(sample_address, id="a2", is_default=True)

        assert pick_checkout_address([first, default], "a1").id == "a1"
        assert pick_checkout_address([first, default]).id == "a2"
        assert pick_checkout_address([first]).id == "a1"
        assert pick_checkout_address([first], "missing") is None
        assert pick_checkout_address([]) is None

    @pytest.mark.asyncio
    async def test_first_address_becomes_default(self, sample_address):
        repo = Mock()
        repo.list_for_user = AsyncMock(return_value=[])
        repo.create = AsyncMock(return_value=self.make(sample_address))
        repo.clear_default = AsyncMock()

        await AddressesDomain(repo).add("user-123", {**sample_address, "is_default": False})

        assert repo.create.await_args.args[0]["is_default"] is True
        repo.clear_default.assert_not_called()

    @pytest.mark.asyncio
    async def test_set_default_unknown(self):
        repo = Mock()
        repo.get = AsyncMock(return_value=None)

        with pytest.raises(ValueError, match=ERROR_ADDRESS_NOT_FOUND):
            await AddressesDomain(repo).set_default("user-123", "nope")


class TestUsers:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "stored,expected",
        [("admin", AppRole.ADMIN), ("shop_owner", AppRole.SHOP_OWNER), (None, AppRole.CUSTOMER), ("root", AppRole.CUSTOMER)],
    )
    async def test_get_role(self, stored, expected):
        repo = Mock()
        repo.get_role = AsyncMock(return_value=stored)

        assert await UsersDomain(repo).get_role("user-123") == expected

    @pytest.mark.asyncio
    async def test_lookup_error_defaults_to_customer(self):
        repo = Mock()
        repo.get_role = AsyncMock(side_effect=RuntimeError("network"))

        assert await UsersDomain(repo).get_role("user-123") == AppRole.CUSTOMER


class TestRevenue:
    def test_summary(self):
        now = datetime(2025, 3, 15, tzinfo=timezone.utc)
        orders = [
            Order(id="1", total_amount="1000.00", status="delivered", created_at="2025-03-02T10:00:00Z"),
            Order(id="2", total_amount="250.50", status="pending", created_at="2025-03-10T10:00:00Z"),
            Order(id="3", total_amount="999.00", status="cancelled", created_at="2025-03-11T10:00:00Z"),
            Order(id="4", total_amount="400.00", status="delivered", created_at="2025-02-27T10:00:00Z"),
            Order(id="5", total_amount="100.00", status="delivered", created_at="2024-03-05T10:00:00Z"),
        ]

        result = summarize_revenue(orders, now)

        assert result["total_revenue"] == 1750.5
        assert result["month_revenue"] == 1250.5
        assert result["total_orders"] == 5
        assert result["stats"][0]["value"] == "₹1,750.50"
        assert len(result["transactions"]) == 5

    def test_no_orders(self):
        result = summarize_revenue([], datetime(2025, 3, 15, tzinfo=timezone.utc))

        assert result["total_revenue"] == 0.0
        assert result["stats"][1]["value"] == "₹0"
