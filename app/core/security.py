# app/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings, get_db
from app.core.exceptions import UnauthorizedError
from app.models.user import User
from app.services.users import user_service

logger = logging.getLogger(__name__)


# =====================================================================
# JWT TOKEN CONFIGURATION
# =====================================================================

security = HTTPBearer(auto_error=False)


# =====================================================================
# TOKEN CREATION
# =====================================================================

def create_access_token(user_id: UUID, email: Optional[str] = None) -> str:
    """
    Mint an access token shaped like the identity provider's.

    Args:
        user_id: Goes into the `sub` claim
        email: Optional email claim

    Returns:
        Encoded JWT access token
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {
        "sub": str(user_id),
        "aud": settings.JWT_AUDIENCE,
        "exp": expire,
    }
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# =====================================================================
# TOKEN VERIFICATION
# =====================================================================

def decode_access_token(token: str) -> dict:
    """
    Verify signature, expiry and audience.

    Raises:
        UnauthorizedError: If the token is invalid, expired or has no usable `sub`
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except JWTError as exc:
        logger.info(f"Rejected access token: {exc}")
        raise UnauthorizedError("Could not validate credentials") from exc

    try:
        UUID(str(payload.get("sub")))
    except ValueError as exc:
        raise UnauthorizedError("Could not validate credentials") from exc

    return payload


# =====================================================================
# USER AUTHENTICATION DEPENDENCIES
# =====================================================================

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Profile row of the authenticated user, created on first request.

    Raises:
        UnauthorizedError: If the token is missing or invalid
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    return user_service.get_or_create(
        db, user_id=UUID(payload["sub"]), email=payload.get("email")
    )
