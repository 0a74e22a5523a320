"""Domain services wrapping repositories."""
from .addresses import AddressesDomain
from .catalog import CatalogDomain
from .revenue import RevenueDomain
from .users import UsersDomain

__all__ = [
    "AddressesDomain",
    "CatalogDomain",
    "RevenueDomain",
    "UsersDomain",
]
