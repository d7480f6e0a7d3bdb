"""
Authentication response handler.

Every login, signup and second-factor request hands its response to
``handle_login_response``, which decides what the response means and
performs the side effects:

1. Upstream response   -> ``handle_upstream_response`` hook (no default)
2. MFA required        -> record the first-factor token, stop
3. Tokens issued       -> persist tokens, clear MFA, continue to redirect
4. PKCE required       -> send the authorization code to the native caller, stop
5. Redirect            -> navigate (unless ``redirect=False``)

Each step can be replaced by a hook on ``AuthResponseHooks``. Hooks may be
plain functions or coroutines; their results are awaited before the next
step runs.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TYPE_CHECKING

from userfront_core.application.tokens import set_cookies_and_tokens
from userfront_core.application.url import (
    RedirectArg,
    default_handle_redirect,
    explicit_redirect,
    resolve_redirect,
)
from userfront_core.domain.authentication import is_mfa_required_response
from userfront_core.domain.errors import PkceRedirectError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.authentication")


class AuthOutcome(str, Enum):
    """Meaning of an authentication response, in precedence order."""

    MFA_REQUIRED = "mfa_required"
    TOKENS_ISSUED = "tokens_issued"
    PKCE_REQUIRED = "pkce_required"
    REDIRECT = "redirect"


def classify_response(data: Mapping[str, Any]) -> AuthOutcome:
    """Pick the single branch a response takes. Pure."""
    if is_mfa_required_response(data):
        return AuthOutcome.MFA_REQUIRED
    if "tokens" in data:
        return AuthOutcome.TOKENS_ISSUED
    if "authorizationCode" in data:
        return AuthOutcome.PKCE_REQUIRED
    return AuthOutcome.REDIRECT


@dataclass
class AuthResponseHooks:
    """
    Optional overrides for each step of the response handler.

    A hook that is set fully replaces the default behaviour of its step.

    Signatures:
        handle_upstream_response(upstream_response, data)
        handle_mfa_required(first_factor_token, data)
        handle_pkce_required(authorization_code, url, data)
        handle_tokens(tokens, data)
        handle_redirect(redirect_to, data)
    """

    handle_upstream_response: Optional[Callable[..., Any]] = None
    handle_mfa_required: Optional[Callable[..., Any]] = None
    handle_pkce_required: Optional[Callable[..., Any]] = None
    handle_tokens: Optional[Callable[..., Any]] = None
    handle_redirect: Optional[Callable[..., Any]] = None

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "AuthResponseHooks":
        """Collect hook keyword arguments, ignoring unset ones."""
        return cls(**{k: v for k, v in kwargs.items() if v is not None})


async def maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


# ═══════════════════════════════════════════════════════════════
# DEFAULT HANDLERS
# ═══════════════════════════════════════════════════════════════


def default_handle_mfa_required(session: "SessionContext", data: Mapping[str, Any]) -> None:
    session.authentication.handle_mfa_required(data)


def default_handle_tokens(session: "SessionContext", tokens: Any, data: Any = None) -> None:
    set_cookies_and_tokens(session, tokens)
    session.authentication.clear_mfa()


# ═══════════════════════════════════════════════════════════════
# HANDLER
# ═══════════════════════════════════════════════════════════════


async def handle_login_response(
    session: "SessionContext",
    data: dict[str, Any],
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    """
    Apply the side effects of an authentication response.

    Args:
        session: Session whose tokens and MFA state are updated
        data: Parsed response body
        redirect: Path to go to afterwards, or False to stay on the page
        hooks: Per-step overrides

    Returns:
        ``data``, unchanged

    Raises:
        PkceRedirectError: PKCE response without a URL to return the code to
    """
    hooks = hooks or AuthResponseHooks()

    if "upstreamResponse" in data and hooks.handle_upstream_response:
        await maybe_await(
            hooks.handle_upstream_response(data["upstreamResponse"], data)
        )

    outcome = classify_response(data)
    logger.debug(f"Authentication response outcome: {outcome.value}")

    if outcome == AuthOutcome.MFA_REQUIRED:
        if hooks.handle_mfa_required:
            await maybe_await(
                hooks.handle_mfa_required(data.get("firstFactorToken"), data)
            )
        else:
            default_handle_mfa_required(session, data)
        return data

    if outcome == AuthOutcome.TOKENS_ISSUED:
        if hooks.handle_tokens:
            await maybe_await(hooks.handle_tokens(data["tokens"], data))
        else:
            default_handle_tokens(session, data["tokens"], data)

    elif outcome == AuthOutcome.PKCE_REQUIRED:
        url = explicit_redirect(redirect) or data.get("redirectTo")
        if not url:
            raise PkceRedirectError()
        authorization_code = data["authorizationCode"]
        if hooks.handle_pkce_required:
            await maybe_await(hooks.handle_pkce_required(authorization_code, url, data))
        else:
            session.pkce.default_handle_pkce_required(authorization_code, url, data)
        return data

    if redirect is False:
        return data

    redirect_to = resolve_redirect(session, redirect, data)
    if hooks.handle_redirect:
        await maybe_await(hooks.handle_redirect(redirect_to, data))
    else:
        default_handle_redirect(session, redirect_to, data)

    return data


# ═══════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════


def compact_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None so they are not sent as ``null``."""
    return {k: v for k, v in payload.items() if v is not None}


async def send_auth_request(
    session: "SessionContext",
    method: str,
    path: str,
    payload: Mapping[str, Any],
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    """
    Send a first-factor or continuation request and handle its response.

    The body always carries ``tenantId``; the pending first-factor token
    (if any) goes in the authorization header and the PKCE challenge (if
    any) in the query string.
    """
    body = {**compact_payload(payload), "tenantId": session.tenant_id}
    data = await session.api.request(
        method,
        path,
        payload=body,
        headers=session.authentication.get_mfa_headers(),
        params=session.pkce.get_pkce_request_query_params(),
    )
    if not isinstance(data, dict) or not data:
        logger.warning(f"Empty response from {method} {path}; nothing to handle")
        return {}
    return await handle_login_response(session, data, redirect=redirect, hooks=hooks)
