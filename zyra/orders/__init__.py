"""Orders package: checkout, status lifecycle, delivery ETA and serializers."""
from .checkout import CheckoutService, generate_order_number, validate_payment
from .delivery import delivery_eta, estimated_delivery, time_left
from .serializer import (
    build_order_payload,
    group_items_by_order,
    qr_payload,
    status_label,
    verification_url,
)
from .status_service import TRANSITIONS, OrderStatusService, can_transition, normalize_status

__all__ = [
    "CheckoutService",
    "OrderStatusService",
    "TRANSITIONS",
    "build_order_payload",
    "can_transition",
    "delivery_eta",
    "estimated_delivery",
    "generate_order_number",
    "group_items_by_order",
    "normalize_status",
    "qr_payload",
    "status_label",
    "time_left",
    "validate_payment",
    "verification_url",
]
