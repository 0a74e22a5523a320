"""Order response serializers."""
import json
from typing import Any, Dict, List, Optional

from zyra.config import PLACEHOLDER_IMAGE, WEBAPP_URL
from zyra.services.money import to_float
from .status_service import normalize_status

STATUS_LABELS: Dict[str, str] = {
    "pending": "Pending",
    "packed": "Packed",
    "shipped": "On the Way",
    "delivered": "Delivered",
    "cancelled": "Cancelled",
}


def status_label(status: Optional[str]) -> str:
    """Display label; unknown statuses read as Pending."""
    return STATUS_LABELS.get(normalize_status(status), STATUS_LABELS["pending"])


def embedded(value: Any) -> Dict[str, Any]:
    """PostgREST to-one embed: object, single-element list, or null."""
    if isinstance(value, list):
        return value[0] if value else {}
    return value or {}


def build_item_payload(item: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build order item payload for API response.

    Args:
        item: order_items row with embedded `products`
    """
    product = embedded(item.get("products"))
    price = to_float(item.get("price"))
    quantity = int(item.get("quantity") or 0)
    return {
        "id": item.get("id"),
        "product_id": item.get("product_id"),
        "product_name": product.get("name", "Unknown Product"),
        "image_url": product.get("image_url") or PLACEHOLDER_IMAGE,
        "quantity": quantity,
        "size": item.get("size"),
        "color": item.get("color"),
        "price": price,
        "line_total": round(price * quantity, 2),
    }


def build_order_payload(order: Dict[str, Any]) -> Dict[str, Any]:
    """Order row (with optional `order_items` and `shops` embeds) for API response."""
    items = [build_item_payload(i) for i in order.get("order_items") or []]
    shop = embedded(order.get("shops"))
    return {
        "id": order.get("id"),
        "order_number": order.get("order_number"),
        "status": order.get("status"),
        "status_label": status_label(order.get("status")),
        "total_amount": to_float(order.get("total_amount")),
        "payment_method": order.get("payment_method"),
        "created_at": order.get("created_at"),
        "updated_at": order.get("updated_at"),
        "shop_id": order.get("shop_id"),
        "shop": shop or None,
        "customer_name": order.get("customer_name"),
        "customer_phone": order.get("customer_phone"),
        "customer_email": order.get("customer_email"),
        "delivery_address": order.get("delivery_address"),
        "delivery_latitude": order.get("delivery_latitude"),
        "delivery_longitude": order.get("delivery_longitude"),
        "items": items,
        "item_summary": item_summary(items),
    }


def item_summary(items: List[Dict[str, Any]]) -> str:
    """'Quantity: 2' for a single line, '+ 3 more items' otherwise."""
    if not items:
        return ""
    if len(items) > 1:
        return f"+ {len(items) - 1} more items"
    return f"Quantity: {items[0].get('quantity')}"


def group_items_by_order(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Regroup order_items rows (each with its embedded parent `orders` row)
    into orders carrying their `order_items`.

    Rows without a parent order are skipped; order follows first appearance.
    """
    orders: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        parent = embedded(row.get("orders"))
        if not parent:
            continue
        order_id = row.get("order_id") or parent.get("id")
        if order_id not in orders:
            orders[order_id] = {**parent, "order_items": []}
        item = {k: v for k, v in row.items() if k != "orders"}
        orders[order_id]["order_items"].append(item)
    return list(orders.values())


def verification_url(order_id: str) -> str:
    """Link encoded in the shop's QR code; opens the verification page."""
    return f"{WEBAPP_URL}/verify-order/{order_id}"


def qr_payload(order: Dict[str, Any]) -> str:
    """Compact order summary encoded in the order list QR code."""
    return json.dumps(
        {
            "orderNumber": order.get("order_number"),
            "total": to_float(order.get("total_amount")),
            "customer": order.get("customer_name"),
        }
    )
