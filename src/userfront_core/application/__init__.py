"""Application layer: token store, response handler, strategies and session helpers."""

from userfront_core.application.authentication import (
    AuthOutcome,
    AuthResponseHooks,
    classify_response,
    handle_login_response,
)
from userfront_core.application.cookies import CookiePersistence
from userfront_core.application.mode import detect_mode, is_test_hostname, set_mode
from userfront_core.application.pkce import PkceState
from userfront_core.application.session import SessionInfo, get_is_logged_in, get_session
from userfront_core.application.tokens import (
    TokenStore,
    is_access_token_locally_valid,
    is_refresh_token_locally_valid,
)
from userfront_core.application.user import User

__all__ = [
    "AuthOutcome",
    "AuthResponseHooks",
    "classify_response",
    "handle_login_response",
    "CookiePersistence",
    "detect_mode",
    "is_test_hostname",
    "set_mode",
    "PkceState",
    "SessionInfo",
    "get_is_logged_in",
    "get_session",
    "TokenStore",
    "is_access_token_locally_valid",
    "is_refresh_token_locally_valid",
    "User",
]
