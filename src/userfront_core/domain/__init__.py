"""
Domain layer: value objects, MFA state and errors.
"""

from userfront_core.domain.authentication import (
    AuthenticationState,
    MfaStatus,
    is_mfa_required_response,
)
from userfront_core.domain.errors import (
    AuthDomainError,
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    PkceRedirectError,
    ServerError,
    UserInputError,
)
from userfront_core.domain.value_objects import (
    CookieOptions,
    FactorDescriptor,
    IssuedToken,
    IssuedTokens,
    Mode,
    ModeReason,
    TokenType,
)

__all__ = [
    "AuthenticationState",
    "MfaStatus",
    "is_mfa_required_response",
    "AuthDomainError",
    "AuthenticationError",
    "ConfigurationError",
    "InvalidTokenError",
    "PkceRedirectError",
    "ServerError",
    "UserInputError",
    "CookieOptions",
    "FactorDescriptor",
    "IssuedToken",
    "IssuedTokens",
    "Mode",
    "ModeReason",
    "TokenType",
]
