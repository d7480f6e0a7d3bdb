"""
Link strategy: passwordless and magic-link login.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import (
    AuthResponseHooks,
    compact_payload,
    send_auth_request,
)
from userfront_core.application.url import RedirectArg, get_query_attr

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.link")


async def login_with_link(
    session: "SessionContext",
    *,
    token: Optional[str] = None,
    uuid: Optional[str] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> Optional[dict[str, Any]]:
    """
    Log in with the ``token`` / ``uuid`` pair from a login link.

    Falls back to ``?token=...&uuid=...`` in the current URL. Returns None
    without a request when either value is still missing.
    """
    token = token or get_query_attr(session, "token")
    uuid = uuid or get_query_attr(session, "uuid")
    if not token or not uuid:
        logger.debug("login_with_link called without token and uuid; skipping")
        return None

    return await send_auth_request(
        session,
        "PUT",
        "auth/link",
        {"token": token, "uuid": uuid},
        redirect=redirect,
        hooks=hooks,
    )


async def send_login_link(session: "SessionContext", email: str) -> dict[str, Any]:
    """Email an existing user a login link."""
    return await session.api.post(
        "auth/link", {"email": email, "tenantId": session.tenant_id}
    )


async def send_passwordless_link(
    session: "SessionContext",
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
    username: Optional[str] = None,
    user_data: Optional[dict[str, Any]] = None,
    options: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Create or update a user and email them a login link."""
    payload = compact_payload(
        {
            "email": email,
            "name": name,
            "username": username,
            "data": user_data,
            "options": options,
        }
    )
    return await session.api.post(
        "auth/link", {**payload, "tenantId": session.tenant_id}
    )
