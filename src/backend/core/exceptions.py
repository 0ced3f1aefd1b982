"""
Typed errors raised by the streak and achievement engine.

The HTTP layer maps each of these to exactly one status code
(see main.create_application).
"""


class StreakEngineError(Exception):
    """Base exception for engine operations."""

    status_code: int = 500

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__class__.__doc__ or "")
        self.message = message or self.__class__.__doc__ or ""


class AuthenticationMissing(StreakEngineError):
    """Authentication required."""

    status_code = 401


class AuthorizationMismatch(StreakEngineError):
    """You can only access your own achievements."""

    status_code = 403


class ResourceNotFound(StreakEngineError):
    """Resource not found."""

    status_code = 404


class UserNotFound(ResourceNotFound):
    """User not found."""


class ExternalIdentityMissing(ResourceNotFound):
    """User or LeetCode username not found."""


class UpstreamUnavailable(StreakEngineError):
    """Failed to calculate streak from LeetCode."""

    status_code = 500


class InternalFault(StreakEngineError):
    """Internal server error."""

    status_code = 500
