"""Address domain: saved delivery addresses and checkout address selection."""
from typing import Optional

from zyra.errors import ERROR_ADDRESS_NOT_FOUND
from zyra.services.geo import validate_coordinates
from zyra.services.models import Address
from zyra.services.repositories import AddressRepository

ADDRESS_FIELDS = (
    "full_name",
    "phone",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "postal_code",
)


def format_delivery_address(address: Address) -> str:
    """One-line address stored on the order."""
    return (
        f"{address.full_name}, {address.address_line1}, {address.city}, "
        f"{address.state} - {address.postal_code}, Phone: {address.phone}"
    )


def pick_checkout_address(addresses: list[Address], address_id: Optional[str] = None) -> Optional[Address]:
    """Requested address, else the default one, else the first saved."""
    if not addresses:
        return None
    if address_id:
        return next((a for a in addresses if a.id == address_id), None)
    return next((a for a in addresses if a.is_default), addresses[0])


class AddressesDomain:
    """Address book operations."""

    def __init__(self, repo: AddressRepository):
        self.repo = repo

    async def list(self, user_id: str) -> list[Address]:
        return await self.repo.list_for_user(user_id)

    async def add(self, user_id: str, data: dict) -> Address:
        row = {k: data.get(k) for k in ADDRESS_FIELDS}
        row["user_id"] = user_id
        if data.get("latitude") is not None or data.get("longitude") is not None:
            row["latitude"], row["longitude"] = validate_coordinates(
                data.get("latitude"), data.get("longitude")
            )

        existing = await self.repo.list_for_user(user_id)
        make_default = bool(data.get("is_default")) or not existing
        if make_default and existing:
            await self.repo.clear_default(user_id)
        row["is_default"] = make_default
        return await self.repo.create(row)

    async def delete(self, user_id: str, address_id: str) -> None:
        if not await self.repo.get(user_id, address_id):
            raise ValueError(ERROR_ADDRESS_NOT_FOUND)
        await self.repo.delete(user_id, address_id)

    async def set_default(self, user_id: str, address_id: str) -> None:
        if not await self.repo.get(user_id, address_id):
            raise ValueError(ERROR_ADDRESS_NOT_FOUND)
        await self.repo.clear_default(user_id)
        await self.repo.mark_default(user_id, address_id)

    async def checkout_address(self, user_id: str, address_id: Optional[str] = None) -> Optional[Address]:
        return pick_checkout_address(await self.repo.list_for_user(user_id), address_id)
