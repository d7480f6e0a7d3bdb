"""
Token refresh.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.tokens import set_cookies_and_tokens
from userfront_core.domain.errors import AuthDomainError, AuthenticationError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.refresh")


async def refresh_tokens(session: "SessionContext") -> dict[str, Any]:
    """
    Exchange the refresh token for new access and ID tokens.

    Raises:
        ServerError: The refresh request was rejected
        AuthenticationError: The response carried no tokens
    """
    refresh_token = session.tokens.refresh_token
    data = await session.api.get(
        "auth/refresh",
        headers={"authorization": f"Bearer {refresh_token}"},
    )
    if not isinstance(data, dict) or not data.get("tokens"):
        raise AuthenticationError("Problem setting cookies")
    set_cookies_and_tokens(session, data["tokens"])
    logger.debug("Tokens refreshed")
    return data


async def refresh(session: "SessionContext") -> Optional[dict[str, Any]]:
    """Refresh tokens, logging failures instead of raising them."""
    try:
        return await refresh_tokens(session)
    except AuthDomainError as e:
        logger.warning(f"Refresh failed: {e.message}")
        return None
