"""
Repository Pattern for Database Operations

One repository per table group:
- RoleRepository: user_roles
- ShopRepository / FollowerRepository: shops, shop_followers
- ProductRepository: products
- CartRepository: cart_items
- AddressRepository: addresses
- OrderRepository: orders, order_items
"""
from .address_repo import AddressRepository
from .cart_repo import CartRepository
from .order_repo import OrderRepository
from .product_repo import ProductRepository
from .role_repo import RoleRepository
from .shop_repo import FollowerRepository, ShopRepository

__all__ = [
    "AddressRepository",
    "CartRepository",
    "FollowerRepository",
    "OrderRepository",
    "ProductRepository",
    "RoleRepository",
    "ShopRepository",
]
