"""
URL helpers: query attributes and post-authentication redirection.
"""

import logging
from typing import Any, Mapping, Optional, Union, TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.url")

RedirectArg = Union[str, bool, None]


def get_query_attr(session: "SessionContext", attr_name: str) -> Optional[str]:
    """Value of ``?attr_name=...`` in the current URL, or None."""
    try:
        value = httpx.URL(session.location.href).params.get(attr_name)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    return value or None


def explicit_redirect(redirect: RedirectArg) -> Optional[str]:
    """The caller's redirect path when it is a non-empty string."""
    if isinstance(redirect, str) and redirect:
        return redirect
    return None


def resolve_redirect(
    session: "SessionContext",
    redirect: RedirectArg = None,
    data: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Resolve where to go after authentication.

    Precedence: explicit ``redirect`` string, then the ``redirect`` query
    attribute, then ``data["redirectTo"]``, then ``"/"``. Returns None when
    ``redirect is False`` (navigation suppressed).
    """
    if redirect is False:
        return None
    return (
        explicit_redirect(redirect)
        or get_query_attr(session, "redirect")
        or (data or {}).get("redirectTo")
        or "/"
    )


def redirect_to_path(session: "SessionContext", path: Optional[str]) -> None:
    """Navigate to ``path`` unless it points at the page we are already on."""
    if not path:
        return
    location = session.location
    try:
        target = httpx.URL(location.href).join(path)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        logger.warning(f"Cannot redirect to invalid path {path!r}: {str(e)}")
        return
    if target.path == location.pathname and target.host == location.hostname:
        return
    location.assign(path)


def default_handle_redirect(
    session: "SessionContext", redirect_to: Optional[str], data: Any = None
) -> None:
    redirect_to_path(session, redirect_to)
