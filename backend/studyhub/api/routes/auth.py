"""
Authentication Routes

Endpoints:
- POST /auth/google - Exchange Google id_token for session
- POST /auth/logout - Clear session
- GET /auth/me - Get current user record and capabilities

Auth Flow:
1. Frontend performs Google Sign-In and receives an id_token
2. Frontend POSTs id_token to /auth/google
3. Backend verifies id_token with Google's public keys
4. Backend looks up the user by email, creating it (no access) on first sign-in
5. Backend returns JWT (in cookie and response body)

Users are identified by email, so only Google-verified emails are accepted.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from studyhub.api.deps import CurrentUser, DbSession, create_access_token
from studyhub.config import get_settings
from studyhub.schemas.auth import GoogleAuthRequest, TokenResponse
from studyhub.schemas.user import CurrentUserRead, UserRead
from studyhub.services.access import capabilities_for, get_or_create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


def verify_google_token(token: str) -> dict:
    """
    Verify a Google id_token and return its claims.

    Checks signature, expiry and audience (google-auth), then issuer.

    Raises:
        ValueError: token invalid
    """
    idinfo = google_id_token.verify_oauth2_token(
        token,
        google_requests.Request(),
        settings.google_client_id,
    )
    if idinfo.get("iss") not in GOOGLE_ISSUERS:
        raise ValueError("Invalid issuer")
    return idinfo


@router.post("/google", response_model=TokenResponse)
async def google_login(
    request: GoogleAuthRequest,
    response: Response,
    db: DbSession,
) -> TokenResponse:
    """
    Exchange Google id_token for a session JWT.

    The id_token is verified cryptographically - we trust Google's signature.
    """
    try:
        idinfo = verify_google_token(request.id_token)
    except ValueError as e:
        logger.warning("Rejected Google id_token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid Google id_token: {e}",
        )

    email = idinfo.get("email")
    # Unverified emails could allow account hijacking
    if not email or not idinfo.get("email_verified", False):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="A verified email address is required",
        )

    user = await get_or_create_user(db, email, name=idinfo.get("name"))
    await db.commit()

    # Generate JWT
    access_token = create_access_token(user.id)
    expires_in = settings.jwt_expire_minutes * 60

    # Set HttpOnly cookie (recommended for web apps)
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        secure=settings.cookie_cross_domain or settings.environment != "development",
        samesite="none" if settings.cookie_cross_domain else "lax",
        max_age=expires_in,
    )

    return TokenResponse(
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    """
    Clear the authentication session.

    Note: This only clears the cookie. A JWT stored elsewhere remains valid
    until expiry, but carries no flags: revoking access in the database
    takes effect immediately regardless.
    """
    response.delete_cookie(
        key="access_token",
        httponly=True,
        secure=settings.cookie_cross_domain or settings.environment != "development",
        samesite="none" if settings.cookie_cross_domain else "lax",
    )


@router.get("/me", response_model=CurrentUserRead)
async def get_me(current_user: CurrentUser) -> CurrentUserRead:
    """
    Get the current user's record, flags and capabilities.

    Clients call this after sign-in and on page reload to decide whether to
    show content, a "waiting for access" screen, or the admin area.
    """
    return CurrentUserRead(
        **UserRead.model_validate(current_user).model_dump(),
        capabilities=sorted(c.value for c in capabilities_for(current_user)),
    )
