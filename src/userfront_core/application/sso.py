"""
SSO strategy.

The browser is sent to the provider's login endpoint on the API, which
302s through the provider and back to the tenant's site.
"""

import logging
from typing import TYPE_CHECKING

import httpx

from userfront_core.application.url import RedirectArg, explicit_redirect, get_query_attr
from userfront_core.domain.errors import ConfigurationError, UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.sso")


def get_provider_link(
    session: "SessionContext", provider: str, redirect: RedirectArg = None
) -> str:
    """
    Build the SSO login URL for a provider.

    ``redirect=False`` asks to come back to the current page.

    Raises:
        UserInputError: No provider given
        ConfigurationError: Session has no tenant
    """
    if not provider:
        raise UserInputError("Missing provider")
    if not session.tenant_id:
        raise ConfigurationError()

    params = {"tenant_id": session.tenant_id, "origin": session.location.origin}

    if redirect is False:
        redirect_to = session.location.pathname
    else:
        redirect_to = explicit_redirect(redirect) or get_query_attr(session, "redirect")
    if redirect_to:
        params["redirect"] = redirect_to

    params.update(session.pkce.get_pkce_request_query_params())

    url = httpx.URL(session.api.url_for(f"auth/{provider}/login"), params=params)
    return str(url)


def signon_with_sso(
    session: "SessionContext", provider: str, redirect: RedirectArg = None
) -> None:
    """Navigate to the provider's login page."""
    url = get_provider_link(session, provider, redirect)
    logger.debug(f"Redirecting to {provider} SSO")
    session.location.assign(url)
