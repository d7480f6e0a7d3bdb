"""
Password strategy: signup, login, migrate-login and password reset.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import (
    AuthResponseHooks,
    compact_payload,
    handle_login_response,
    send_auth_request,
)
from userfront_core.application.url import RedirectArg, get_query_attr
from userfront_core.domain.errors import AuthenticationError, UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.password")


async def signup_with_password(
    session: "SessionContext",
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    name: Optional[str] = None,
    password: Optional[str] = None,
    user_data: Optional[dict[str, Any]] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    """Register a new user. ``user_data`` is sent as the user's ``data`` object."""
    return await send_auth_request(
        session,
        "POST",
        "auth/create",
        {
            "email": email,
            "username": username,
            "name": name,
            "password": password,
            "data": user_data,
        },
        redirect=redirect,
        hooks=hooks,
    )


async def login_with_password(
    session: "SessionContext",
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    email_or_username: Optional[str] = None,
    password: Optional[str] = None,
    options: Optional[dict[str, Any]] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    return await send_auth_request(
        session,
        "POST",
        "auth/basic",
        {
            "emailOrUsername": email or username or email_or_username,
            "password": password,
            "options": options,
        },
        redirect=redirect,
        hooks=hooks,
    )


async def login_with_password_migrate(
    session: "SessionContext",
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    email_or_username: Optional[str] = None,
    password: Optional[str] = None,
    no_reset_email: bool = False,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    """
    Log in through the password migration endpoint.

    The server checks the password against the tenant's upstream user
    store. By default a user without a password is sent a reset email;
    ``no_reset_email=True`` returns an error instead.
    """
    return await send_auth_request(
        session,
        "POST",
        "auth/password/migrate",
        {
            "emailOrUsername": email or username or email_or_username,
            "password": password,
            "options": {"noResetEmail": True} if no_reset_email else None,
        },
        redirect=redirect,
        hooks=hooks,
    )


# ═══════════════════════════════════════════════════════════════
# RESET / UPDATE
# ═══════════════════════════════════════════════════════════════


async def send_reset_link(session: "SessionContext", email: str) -> dict[str, Any]:
    return await session.api.post(
        "auth/reset/link", {"email": email, "tenantId": session.tenant_id}
    )


async def update_password_with_link(
    session: "SessionContext",
    *,
    password: Optional[str] = None,
    token: Optional[str] = None,
    uuid: Optional[str] = None,
    redirect: RedirectArg = None,
) -> dict[str, Any]:
    """
    Set a new password with link credentials (``?token=...&uuid=...``).

    Logs the user in with the returned tokens and redirects.

    Raises:
        UserInputError: No token or uuid in the arguments or URL
        AuthenticationError: The server returned no tokens
    """
    token = token or get_query_attr(session, "token")
    uuid = uuid or get_query_attr(session, "uuid")
    if not token or not uuid:
        raise UserInputError("Missing token or uuid")

    data = await session.api.put(
        "auth/reset",
        {
            "tenantId": session.tenant_id,
            "uuid": uuid,
            "token": token,
            "password": password,
        },
    )
    if not isinstance(data, dict) or not data.get("tokens"):
        raise AuthenticationError(
            "There was a problem resetting your password. Please try again."
        )
    return await handle_login_response(session, data, redirect=redirect)


async def update_password_with_jwt(
    session: "SessionContext",
    *,
    password: Optional[str] = None,
    existing_password: Optional[str] = None,
) -> dict[str, Any]:
    """Change the logged-in user's password."""
    access_token = session.tokens.access_token
    if not access_token:
        raise UserInputError(
            'update_password(method="jwt") was called without a JWT access token.'
        )
    return await session.api.put(
        "auth/basic",
        compact_payload(
            {
                "tenantId": session.tenant_id,
                "password": password,
                "existingPassword": existing_password,
            }
        ),
        headers={"authorization": f"Bearer {access_token}"},
    )


async def update_password(
    session: "SessionContext",
    *,
    method: Optional[str] = None,
    password: Optional[str] = None,
    existing_password: Optional[str] = None,
    token: Optional[str] = None,
    uuid: Optional[str] = None,
    redirect: RedirectArg = None,
) -> dict[str, Any]:
    """
    Set a password with link credentials or the JWT access token.

    ``method`` may be ``"link"`` or ``"jwt"``. Without it, link credentials
    (from the arguments or the URL) are tried first, then the access token.
    """
    if method == "link":
        return await update_password_with_link(
            session, password=password, token=token, uuid=uuid, redirect=redirect
        )
    if method == "jwt":
        return await update_password_with_jwt(
            session, password=password, existing_password=existing_password
        )

    token = token or get_query_attr(session, "token")
    uuid = uuid or get_query_attr(session, "uuid")
    if token and uuid:
        return await update_password_with_link(
            session, password=password, token=token, uuid=uuid, redirect=redirect
        )
    if session.tokens.access_token:
        return await update_password_with_jwt(
            session, password=password, existing_password=existing_password
        )
    raise UserInputError(
        "update_password() was called without link credentials (token & uuid) "
        "or a JWT access token."
    )


reset_password = update_password
