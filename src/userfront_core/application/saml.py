"""
SAML identity-provider login completion.

When the tenant acts as a SAML IdP, a logged-in user is sent back to the
service provider through ``auth/saml/idp/login`` with a one-time token.
"""

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.saml")


async def complete_saml_login(session: "SessionContext") -> None:
    access_token = session.tokens.access_token
    if not access_token:
        logger.warning("Cannot complete SAML login without access token")
        return

    data = await session.api.get(
        "auth/saml/idp/token",
        headers={"authorization": f"Bearer {access_token}"},
    )

    url = httpx.URL(
        session.api.url_for("auth/saml/idp/login"),
        params={
            "tenant_id": session.tenant_id,
            "token": (data or {}).get("token", ""),
            "uuid": session.user.user_uuid or "",
        },
    )
    session.location.assign(str(url))
