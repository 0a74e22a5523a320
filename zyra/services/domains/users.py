"""Users domain: application roles."""
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.services.models import AppRole
from zyra.services.repositories import RoleRepository

logger = get_logger(__name__)


class UsersDomain:
    """Role lookups and admin role management."""

    def __init__(self, repo: RoleRepository):
        self.repo = repo

    async def get_role(self, user_id: str) -> AppRole:
        """
        Role of a user. Missing rows, unknown values and lookup failures
        all fall back to customer.
        """
        try:
            role = await self.repo.get_role(user_id)
        except Exception as e:
            logger.warning(f"Role lookup failed for {sanitize_id_for_logging(user_id)}: {e}")
            return AppRole.CUSTOMER
        try:
            return AppRole(role) if role else AppRole.CUSTOMER
        except ValueError:
            logger.warning(f"Unknown role '{role}' for {sanitize_id_for_logging(user_id)}")
            return AppRole.CUSTOMER

    async def set_role(self, user_id: str, role: AppRole) -> dict:
        logger.info(f"Setting role of {sanitize_id_for_logging(user_id)} to {role.value}")
        return await self.repo.set_role(user_id, role.value)

    async def list_roles(self) -> list[dict]:
        return await self.repo.list_all()
