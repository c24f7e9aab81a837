"""
FastAPI Dependencies for Authentication and Authorization.

Key patterns:
1. get_current_user: Extracts and validates JWT, re-reads the User row
2. require_capability: explicit capability check at each route boundary
3. No global "current user" state - always pass user explicitly

Security model:
- JWT stored in HttpOnly cookie (recommended) or Authorization header
- The JWT only carries the user id; access/admin flags are read from the
  database on every request, so changes apply on the next request
- Content reads need read_content, content writes need write_content,
  user administration needs manage_users
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated
from uuid import UUID

from fastapi import Cookie, Depends, Header, HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config import get_settings
from studyhub.db.models import User
from studyhub.db.session import get_db
from studyhub.services.access import Capability, capabilities_for, get_user

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# JWT UTILITIES
# =============================================================================


def create_access_token(user_id: UUID) -> str:
    """
    Create a JWT access token for a user.

    Token payload contains:
    - sub: user_id as string (standard JWT subject claim)
    - exp: expiration timestamp

    Flags are deliberately not in the token; see get_current_user.
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID | None:
    """
    Decode and validate a JWT access token.

    Returns user_id if valid, None if invalid/expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        user_id_str = payload.get("sub")
        if user_id_str is None:
            return None
        return UUID(user_id_str)
    except (JWTError, ValueError):
        return None


# =============================================================================
# AUTHENTICATION DEPENDENCIES
# =============================================================================


async def get_token_from_request(
    authorization: Annotated[str | None, Header()] = None,
    access_token: Annotated[str | None, Cookie()] = None,
) -> str:
    """
    Extract JWT token from request.

    Supports two methods (in order of preference):
    1. HttpOnly cookie named 'access_token' (recommended for web apps)
    2. Authorization header: 'Bearer <token>'
    """
    # Try cookie first
    if access_token:
        return access_token

    # Fall back to Authorization header
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[str, Depends(get_token_from_request)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Validate JWT and return the current authenticated user.

    The user row is fetched fresh on every request. An admin who just
    demoted themself therefore has no admin capability on their next call.

    Raises 401 if:
    - Token is missing, invalid, or expired
    - User no longer exists in database
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = decode_access_token(token)
    if user_id is None:
        raise credentials_exception

    user = await get_user(db, user_id)
    if user is None:
        raise credentials_exception

    return user


# Type alias for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# AUTHORIZATION
# =============================================================================


def require_capability(capability: Capability):
    """
    Dependency factory: the current user, if they hold ``capability``.

        @router.get("/subjects")
        async def list_subjects(user: Annotated[User, Depends(require_capability(Capability.READ_CONTENT))]):
            ...

    Raises 403 otherwise. The message does not say which flag is missing.
    """

    async def checker(current_user: CurrentUser) -> User:
        if capability not in capabilities_for(current_user):
            logger.info("Denied %s to user %s", capability.value, current_user.id)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return current_user

    return checker


ContentReader = Annotated[User, Depends(require_capability(Capability.READ_CONTENT))]
ContentWriter = Annotated[User, Depends(require_capability(Capability.WRITE_CONTENT))]
UserManager = Annotated[User, Depends(require_capability(Capability.MANAGE_USERS))]


def get_or_404(resource: object | None, detail: str = "Resource not found"):
    """Return ``resource`` or raise 404 if it is None."""
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return resource
