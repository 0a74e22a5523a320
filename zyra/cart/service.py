"""Cart manager service over the cart_items table."""
from typing import Optional

from zyra.errors import (
    ERROR_CART_ITEM_NOT_FOUND,
    ERROR_INVALID_QUANTITY,
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_PRODUCT_UNAVAILABLE,
)
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.services.repositories import CartRepository, ProductRepository
from .models import Cart

logger = get_logger(__name__)


class CartManager:
    """
    Manages shopping carts stored as cart_items rows.

    A line is identified by product, size and colour; adding the same
    combination again increases its quantity.
    """

    def __init__(self, repo: CartRepository, products: ProductRepository):
        self.repo = repo
        self.products = products

    async def get_cart(self, user_id: str) -> Cart:
        rows = await self.repo.list_for_user(user_id)
        return Cart.from_rows(user_id, rows)

    async def add_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int = 1,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Cart:
        if not isinstance(quantity, int) or quantity < 1:
            raise ValueError(ERROR_INVALID_QUANTITY)

        product = await self.products.get_by_id(product_id)
        if not product:
            raise ValueError(ERROR_PRODUCT_NOT_FOUND)
        if not product.is_active:
            raise ValueError(ERROR_PRODUCT_UNAVAILABLE)

        existing = await self.repo.find_line(user_id, product_id, size, color)
        if existing:
            await self.repo.set_quantity(existing["id"], existing["quantity"] + quantity)
        else:
            await self.repo.insert(
                {
                    "user_id": user_id,
                    "product_id": product_id,
                    "quantity": quantity,
                    "size": size,
                    "color": color,
                }
            )

        logger.info(f"Cart {sanitize_id_for_logging(user_id)}: +{quantity} x {product_id}")
        return await self.get_cart(user_id)

    async def update_item_quantity(self, user_id: str, item_id: str, quantity: int) -> Cart:
        """Set a line's quantity; 0 removes the line."""
        if not isinstance(quantity, int) or quantity < 0:
            raise ValueError(ERROR_INVALID_QUANTITY)

        line = await self.repo.get_line(user_id, item_id)
        if not line:
            raise LookupError(ERROR_CART_ITEM_NOT_FOUND)

        if quantity == 0:
            await self.repo.delete_line(user_id, item_id)
        else:
            await self.repo.set_quantity(item_id, quantity)
        return await self.get_cart(user_id)

    async def remove_item(self, user_id: str, item_id: str) -> Cart:
        return await self.update_item_quantity(user_id, item_id, 0)

    async def clear_cart(self, user_id: str) -> None:
        await self.repo.clear(user_id)
