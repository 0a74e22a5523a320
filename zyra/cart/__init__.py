"""Cart package: models and manager."""
from .models import Cart, CartItem
from .service import CartManager

__all__ = [
    "Cart",
    "CartItem",
    "CartManager",
]
