"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from zyra.config import DELIVERY_CHARGE, PLACEHOLDER_IMAGE
from zyra.services.money import line_total, round_money, sum_money, to_decimal, to_float


@dataclass
class CartItem:
    """Single cart line joined with its product."""
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    shop_id: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    stock_quantity: Optional[int] = None
    is_active: bool = True

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        self.quantity = int(self.quantity)

    @property
    def total_price(self) -> Decimal:
        """Price for all units of this line."""
        return line_total(self.unit_price, self.quantity)

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity is None or self.stock_quantity >= self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "image_url": self.image_url or PLACEHOLDER_IMAGE,
            "category": self.category,
            "shop_id": self.shop_id,
            "size": self.size,
            "color": self.color,
            "quantity": self.quantity,
            "unit_price": to_float(self.unit_price),
            "total_price": to_float(self.total_price),
            "in_stock": self.in_stock,
        }

    @classmethod
    def from_row(cls, row: dict) -> Optional["CartItem"]:
        """
        Build from a cart_items row with its embedded `products` relation.

        Returns None when the product no longer exists.
        """
        product = row.get("products")
        # PostgREST embeds to-one relations as an object, older clients as a list
        if isinstance(product, list):
            product = product[0] if product else None
        if not product:
            return None
        return cls(
            id=str(row["id"]),
            product_id=row["product_id"],
            product_name=product.get("name", ""),
            quantity=row.get("quantity", 1),
            unit_price=product.get("price"),
            shop_id=product.get("shop_id"),
            image_url=product.get("image_url"),
            category=product.get("category"),
            size=row.get("size"),
            color=row.get("color"),
            stock_quantity=product.get("stock_quantity"),
            is_active=product.get("is_active", True) is not False,
        )


@dataclass
class Cart:
    """Shopping cart of one user."""
    user_id: str
    items: list[CartItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return sum_money(item.total_price for item in self.items)

    @property
    def delivery(self) -> Decimal:
        return round_money(DELIVERY_CHARGE)

    @property
    def total(self) -> Decimal:
        return round_money(self.subtotal + self.delivery)

    def group_by_shop(self) -> dict[str, list[CartItem]]:
        """Cart lines bucketed by shop, in the order shops first appear."""
        groups: dict[str, list[CartItem]] = {}
        for item in self.items:
            groups.setdefault(item.shop_id or "", []).append(item)
        return groups

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total_items": self.total_items,
            "subtotal": to_float(self.subtotal),
            "delivery": to_float(self.delivery),
            "total": to_float(self.total),
            "shop_count": len(self.group_by_shop()),
        }

    @classmethod
    def from_rows(cls, user_id: str, rows: list[dict]) -> "Cart":
        items = [item for item in (CartItem.from_row(r) for r in rows) if item is not None]
        return cls(user_id=user_id, items=items)
