"""
Session queries: is the user logged in, and where is the login flow at.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TYPE_CHECKING

from userfront_core.application.refresh import refresh
from userfront_core.application.tokens import (
    is_access_token_locally_valid,
    is_refresh_token_locally_valid,
)
from userfront_core.domain.value_objects import FactorDescriptor

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.session")


@dataclass
class SessionInfo:
    """Snapshot of the session returned by ``get_session``."""

    is_logged_in: bool
    needs_second_factor: bool
    first_factors: list[FactorDescriptor] = field(default_factory=list)
    second_factors: list[FactorDescriptor] = field(default_factory=list)
    reset_mfa_state: Optional[Callable[[], None]] = field(default=None, repr=False)


async def get_is_logged_in(session: "SessionContext") -> bool:
    """
    True if the access token is locally valid, refreshing it once if the
    refresh token still is.

    Tokens are checked locally only; use ``verify_token`` for signatures.
    """
    try:
        if is_access_token_locally_valid(session):
            return True
        if not is_refresh_token_locally_valid(session):
            return False
        await refresh(session)
        return is_access_token_locally_valid(session)
    except Exception as e:
        logger.warning(f"Problem checking login state: {str(e)}")
        return False


async def get_session(session: "SessionContext") -> SessionInfo:
    is_logged_in = await get_is_logged_in(session)
    authentication = session.authentication
    return SessionInfo(
        is_logged_in=is_logged_in,
        needs_second_factor=authentication.is_mfa_required(),
        first_factors=list(authentication.first_factors),
        second_factors=list(authentication.second_factors),
        reset_mfa_state=authentication.clear_mfa,
    )
