"""Admin API Pydantic Models."""
from pydantic import BaseModel

from zyra.services.models import AppRole


class ShopStatusRequest(BaseModel):
    is_active: bool


class AdminOrderStatusRequest(BaseModel):
    status: str
    # Admins may skip the lifecycle table (e.g. reopen a cancelled order)
    check_transition: bool = False


class SetRoleRequest(BaseModel):
    role: AppRole
