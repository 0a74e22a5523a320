"""
Checkout Service

Turns a cart into orders:
1. Validate payment method, cart and delivery address
2. Check stock for every product
3. Split the cart into one order per shop, with its order_items
4. Decrement product stock
5. Clear the cart and broadcast order.created

Steps run one after another against the database with no transaction;
a failure part way through is logged and re-raised.
"""
import re
import secrets
from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

from zyra.cart import Cart, CartManager
from zyra.errors import (
    ERROR_ADDRESS_NOT_FOUND,
    ERROR_ADDRESS_REQUIRED,
    ERROR_CART_EMPTY,
    ERROR_INVALID_PAYMENT_METHOD,
    ERROR_INVALID_UPI_ID,
    ERROR_OUT_OF_STOCK,
    ERROR_PRODUCT_UNAVAILABLE,
)
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.realtime import emit_order_created
from zyra.services.domains.addresses import AddressesDomain, format_delivery_address
from zyra.services.models import Address, AuthUser, Order, OrderStatus, PaymentMethod, Product
from zyra.services.money import sum_money, to_float
from zyra.services.repositories import OrderRepository, ProductRepository

logger = get_logger(__name__)

UPI_ID_PATTERN = re.compile(r"^[\w.\-]{2,256}@[A-Za-z][A-Za-z0-9]{1,63}$")


def validate_payment(payment_method: str, upi_id: Optional[str] = None) -> PaymentMethod:
    """
    Raises:
        ValueError: unsupported method, or UPI without a well-formed UPI id
    """
    try:
        method = PaymentMethod((payment_method or "").lower())
    except ValueError:
        raise ValueError(ERROR_INVALID_PAYMENT_METHOD)
    if method == PaymentMethod.UPI and not (upi_id and UPI_ID_PATTERN.match(upi_id.strip())):
        raise ValueError(ERROR_INVALID_UPI_ID)
    return method


def generate_order_number(now: Optional[datetime] = None) -> str:
    """Human-readable order number, e.g. ZY250314-9F2A1C."""
    now = now or datetime.now(timezone.utc)
    return f"ZY{now:%y%m%d}-{secrets.token_hex(3).upper()}"


def product_demand(cart: Cart) -> dict[str, int]:
    """Total quantity per product across all lines (sizes/colours share stock)."""
    demand: dict[str, int] = defaultdict(int)
    for item in cart.items:
        demand[item.product_id] += item.quantity
    return dict(demand)


def check_stock(demand: dict[str, int], products: dict[str, Product]) -> None:
    """
    Raises:
        ValueError: a product is gone, inactive, or short of stock
    """
    for product_id, quantity in demand.items():
        product = products.get(product_id)
        if not product or not product.is_active:
            raise ValueError(ERROR_PRODUCT_UNAVAILABLE)
        if not product.has_stock_for(quantity):
            raise ValueError(f"{ERROR_OUT_OF_STOCK}: {product.name} ({product.stock_quantity} left)")


class CheckoutService:
    """Checkout summary and order placement."""

    def __init__(
        self,
        cart: CartManager,
        addresses: AddressesDomain,
        products: ProductRepository,
        orders: OrderRepository,
    ):
        self.cart = cart
        self.addresses = addresses
        self.products = products
        self.orders = orders

    async def _resolve_address(self, user_id: str, address_id: Optional[str]) -> Address:
        address = await self.addresses.checkout_address(user_id, address_id)
        if address is None:
            raise ValueError(ERROR_ADDRESS_NOT_FOUND if address_id else ERROR_ADDRESS_REQUIRED)
        return address

    async def summarize(self, user: AuthUser, address_id: Optional[str] = None) -> dict:
        """Checkout summary: address, items and price details."""
        cart = await self.cart.get_cart(user.id)
        address = await self.addresses.checkout_address(user.id, address_id)
        return {
            "address": address.model_dump(mode="json") if address else None,
            **cart.to_dict(),
        }

    async def place_order(
        self,
        user: AuthUser,
        payment_method: str,
        address_id: Optional[str] = None,
        upi_id: Optional[str] = None,
    ) -> list[Order]:
        """
        Place the caller's cart as one order per shop.

        Raises:
            ValueError: validation failures (nothing has been written yet)
        """
        method = validate_payment(payment_method, upi_id)

        cart = await self.cart.get_cart(user.id)
        if cart.is_empty:
            raise ValueError(ERROR_CART_EMPTY)

        address = await self._resolve_address(user.id, address_id)

        demand = product_demand(cart)
        products = await self.products.get_many(list(demand))
        check_stock(demand, products)

        delivery_address = format_delivery_address(address)
        orders: list[Order] = []

        for shop_id, items in cart.group_by_shop().items():
            order = await self.orders.create(
                {
                    "order_number": generate_order_number(),
                    "user_id": user.id,
                    "shop_id": shop_id or None,
                    "customer_name": address.full_name,
                    "customer_phone": address.phone,
                    "customer_email": user.email,
                    "total_amount": to_float(sum_money(i.total_price for i in items)),
                    "status": OrderStatus.PENDING.value,
                    "payment_method": method.value,
                    "delivery_address": delivery_address,
                    "delivery_latitude": address.latitude,
                    "delivery_longitude": address.longitude,
                }
            )
            await self.orders.create_items(
                [
                    {
                        "order_id": order.id,
                        "product_id": item.product_id,
                        "quantity": item.quantity,
                        "size": item.size,
                        "color": item.color,
                        "price": to_float(item.unit_price),
                    }
                    for item in items
                ]
            )
            orders.append(order)
            logger.info(
                f"Order {order.order_number} created for shop {sanitize_id_for_logging(shop_id)} "
                f"({len(items)} lines, {order.total_amount})"
            )

        await self._decrement_stock(demand, products)
        await self.cart.clear_cart(user.id)

        for order in orders:
            await emit_order_created(
                order.id,
                order.order_number,
                user.id,
                order.shop_id,
                to_float(order.total_amount),
            )

        logger.info(
            f"Checkout for {sanitize_id_for_logging(user.id)}: "
            f"{len(orders)} order(s), payment={method.value}"
        )
        return orders

    async def _decrement_stock(self, demand: dict[str, int], products: dict[str, Product]) -> None:
        """Subtract ordered quantities; untracked stock (None) is left alone."""
        for product_id, quantity in demand.items():
            product = products[product_id]
            if product.stock_quantity is None:
                continue
            remaining = max(0, product.stock_quantity - quantity)
            await self.products.set_stock(product_id, remaining)
            logger.debug(f"Stock {product_id}: {product.stock_quantity} -> {remaining}")
