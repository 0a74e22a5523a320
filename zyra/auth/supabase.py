"""Supabase Auth bearer-token verification."""
from typing import Optional

from fastapi import Header, HTTPException

from zyra.errors import ERROR_INVALID_TOKEN, ERROR_UNAUTHORIZED
from zyra.logging import get_logger
from zyra.services.database import get_database
from zyra.services.models import AuthUser

logger = get_logger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return None


async def verify_user(authorization: str = Header(None, alias="Authorization")) -> AuthUser:
    """
    Resolve the caller from a Supabase access token.

    The app role comes from user_roles (customer when missing).
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    db = get_database()
    try:
        response = await db.client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail=ERROR_INVALID_TOKEN)

    user = getattr(response, "user", None)
    if not user:
        raise HTTPException(status_code=401, detail=ERROR_INVALID_TOKEN)

    metadata = getattr(user, "user_metadata", None) or {}
    role = await db.get_user_role(user.id)
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        full_name=metadata.get("full_name"),
        role=role,
    )
