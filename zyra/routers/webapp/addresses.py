"""WebApp Address Book Router."""
from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import verify_user
from zyra.services.database import get_database
from zyra.services.models import AuthUser
from ..deps import http_error
from .models import AddressRequest

router = APIRouter(tags=["webapp-addresses"])


@router.get("/addresses")
async def list_addresses(user: AuthUser = Depends(verify_user)):
    db = get_database()
    addresses = await db.list_addresses(user.id)
    return {"addresses": [a.model_dump(mode="json") for a in addresses]}


@router.post("/addresses", status_code=201)
async def add_address(request: AddressRequest, user: AuthUser = Depends(verify_user)):
    """Save an address. The first saved address becomes the default."""
    db = get_database()
    try:
        address = await db.add_address(user.id, request.model_dump())
    except Exception as e:
        raise http_error(e, "Failed to save address")
    return {"address": address.model_dump(mode="json")}


@router.delete("/addresses/{address_id}")
async def delete_address(address_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        await db.delete_address(user.id, address_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise http_error(e, "Failed to delete address")
    return {"success": True}


@router.post("/addresses/{address_id}/default")
async def set_default_address(address_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        await db.set_default_address(user.id, address_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise http_error(e, "Failed to update address")
    return {"success": True}
