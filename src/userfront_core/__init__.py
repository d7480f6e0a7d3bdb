"""
userfront-core: client-side authentication SDK for Userfront.

Coordinates tokens, cookies, local storage and navigation with the
Userfront authentication API.
"""

__version__ = "0.1.0"

from userfront_core.context import SessionContext
from userfront_core.config import AuthClientConfig
from userfront_core.factory import create_session
from userfront_core.client import AuthClient

from userfront_core.application.authentication import (
    AuthOutcome,
    AuthResponseHooks,
    classify_response,
    handle_login_response,
)
from userfront_core.application.login import login
from userfront_core.application.signup import signup
from userfront_core.application.logout import logout, redirect_if_logged_in
from userfront_core.application.mode import set_mode
from userfront_core.application.refresh import refresh
from userfront_core.application.session import SessionInfo, get_session
from userfront_core.adapters.jwt import verify_token

from userfront_core.domain.errors import (
    AuthDomainError,
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    PkceRedirectError,
    ServerError,
    UserInputError,
)
from userfront_core.domain.value_objects import Mode, ModeReason, TokenType

__all__ = [
    # Version
    "__version__",
    # Session
    "SessionContext",
    "AuthClientConfig",
    "create_session",
    "AuthClient",
    # Response handling
    "AuthOutcome",
    "AuthResponseHooks",
    "classify_response",
    "handle_login_response",
    # Operations
    "login",
    "signup",
    "logout",
    "redirect_if_logged_in",
    "set_mode",
    "refresh",
    "SessionInfo",
    "get_session",
    "verify_token",
    # Errors
    "AuthDomainError",
    "AuthenticationError",
    "ConfigurationError",
    "InvalidTokenError",
    "PkceRedirectError",
    "ServerError",
    "UserInputError",
    # Value objects
    "Mode",
    "ModeReason",
    "TokenType",
]
