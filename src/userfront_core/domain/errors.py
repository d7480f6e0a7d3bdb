"""
Domain errors for the authentication client.

These errors provide a consistent interface for reporting failures
across the strategy dispatchers, the response handler and the HTTP layer.
"""

from typing import Optional, Any


class AuthDomainError(Exception):
    """Base class for all auth client errors."""

    def __init__(
        self,
        message: str,
        code: str = "AUTH_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class UserInputError(AuthDomainError):
    """Raised before any request when a call is missing a required field."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_INPUT",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ConfigurationError(AuthDomainError):
    """Raised when an operation needs a tenant but the session has none."""

    def __init__(
        self,
        message: str = "Missing tenant ID",
        code: str = "NOT_INITIALIZED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ServerError(AuthDomainError):
    """
    Raised for any non-2xx API response.

    The message is the server's ``message`` field verbatim, so every call
    site handles a single error shape regardless of the endpoint.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: str = "SERVER_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.status_code = status_code


class AuthenticationError(AuthDomainError):
    """Raised when a response does not have the shape a flow requires."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_FAILED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid, expired, or malformed."""

    def __init__(
        self,
        message: str = "Invalid token",
        code: str = "INVALID_TOKEN",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class PkceRedirectError(AuthDomainError):
    """Raised when a PKCE response arrives without a destination URL."""

    def __init__(
        self,
        message: str = "Missing PKCE redirect url",
        code: str = "PKCE_REDIRECT_MISSING",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
