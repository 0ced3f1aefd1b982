"""
Shared dependencies for API endpoints.

Includes:
- Caller identity from the session JWT
- Same-identity authorization for per-user resources
- Service lookup from application state
"""

from typing import Annotated

import structlog
from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationMissing, AuthorizationMismatch
from core.security import decode_token, same_identity
from services.achievement_service import AchievementService

logger = structlog.get_logger(__name__)

# Missing credentials are reported through AuthenticationMissing (401)
security_optional = HTTPBearer(auto_error=False)


# =============================================================================
# Caller Identity (JWT-based)
# =============================================================================


async def get_current_user_email(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_optional)],
) -> str:
    """
    Extract and validate the caller's email from the JWT token.

    Raises:
        AuthenticationMissing: If no token is provided or it is invalid/expired.
    """
    if credentials is None:
        raise AuthenticationMissing()

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthenticationMissing("Invalid or expired token")

    email = payload.get("sub") or payload.get("email")
    if not email:
        raise AuthenticationMissing("Invalid token payload")

    return str(email)


async def get_authorized_user_key(
    user_key: Annotated[str, Path(description="URL-encoded user email")],
    current_email: Annotated[str, Depends(get_current_user_email)],
) -> str:
    """
    Ensure the caller is requesting their own resource.

    Returns the (decoded) user key.

    Raises:
        AuthorizationMismatch: If the caller's identity differs from the path.
    """
    if not same_identity(current_email, user_key):
        logger.warning("identity_mismatch", caller=current_email, requested=user_key)
        raise AuthorizationMismatch()
    return user_key


# =============================================================================
# Services
# =============================================================================


def get_achievement_service(request: Request) -> AchievementService:
    """Get the AchievementService built at startup."""
    return request.app.state.achievement_service
