"""
Logout and logged-in redirection.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.session import get_is_logged_in
from userfront_core.application.tokens import remove_all_cookies
from userfront_core.application.url import (
    RedirectArg,
    explicit_redirect,
    get_query_attr,
    redirect_to_path,
)
from userfront_core.domain.errors import AuthDomainError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.logout")


async def logout(
    session: "SessionContext", redirect: RedirectArg = None
) -> Optional[dict[str, Any]]:
    """
    Log the user out on the server and remove every token cookie.

    Cookies are removed even when the server call fails. Afterwards the
    browser goes to ``redirect`` or the tenant's logout path, unless
    ``redirect`` is False.
    """
    access_token = session.tokens.access_token
    if not access_token:
        remove_all_cookies(session)
        session.authentication.clear_mfa()
        return None

    try:
        data = await session.api.get(
            "auth/logout", headers={"authorization": f"Bearer {access_token}"}
        )
    except AuthDomainError as e:
        logger.warning(f"Problem logging out: {e.message}")
        remove_all_cookies(session)
        session.authentication.clear_mfa()
        return None

    remove_all_cookies(session)
    session.authentication.clear_mfa()

    if redirect is not False:
        redirect_to_path(
            session, explicit_redirect(redirect) or (data or {}).get("redirectTo")
        )
    return data


async def redirect_if_logged_in(
    session: "SessionContext", redirect: RedirectArg = None
) -> None:
    """
    Send a logged-in user away from a login or signup page.

    Destination: explicit ``redirect``, then ``?redirect=``, then the
    tenant's after-login path from ``GET self``. If that lookup fails the
    session is treated as stale and its cookies are removed.
    """
    if not await get_is_logged_in(session):
        remove_all_cookies(session)
        return

    path = explicit_redirect(redirect) or get_query_attr(session, "redirect")
    if path:
        redirect_to_path(session, path)
        return

    try:
        data = await session.api.get(
            "self", headers={"authorization": f"Bearer {session.tokens.access_token}"}
        )
    except AuthDomainError as e:
        logger.warning(f"Problem fetching login redirect path: {e.message}")
        remove_all_cookies(session)
        return
    tenant = (data or {}).get("tenant") or {}
    redirect_to_path(session, tenant.get("loginRedirectPath"))
