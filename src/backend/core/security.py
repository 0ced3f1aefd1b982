"""Security utilities for authentication.

Session tokens are JWTs whose subject is the user's email address. They are
minted by the identity frontend; this service only needs to validate them.
"""

from typing import Any

from jose import JWTError, jwt

from core.config import settings


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        The decoded payload or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.TOKEN_ISSUER,
            audience=settings.TOKEN_AUDIENCE,
        )
    except JWTError:
        return None


def same_identity(a: str, b: str) -> bool:
    """Compare two email identities (case-insensitive, surrounding whitespace ignored)."""
    return a.strip().lower() == b.strip().lower()
