"""
Mode (test vs live) resolution.

The initial guess is a pure function of the page's hostname and protocol;
``set_mode`` then asks the tenant mode endpoint, which also returns the
tenant's first-factor configuration.
"""

import logging
from typing import TYPE_CHECKING

from userfront_core.constants import PRIVATE_IP_REGEX
from userfront_core.domain.errors import AuthDomainError
from userfront_core.domain.value_objects import Mode, ModeReason

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.mode")


def is_test_hostname(hostname: str) -> bool:
    """True for localhost and private-network IPv4 hostnames."""
    if not hostname:
        return True
    return "localhost" in hostname or PRIVATE_IP_REGEX.search(hostname) is not None


def detect_mode(hostname: str, protocol: str = "https:") -> tuple[Mode, ModeReason]:
    if is_test_hostname(hostname):
        return Mode.TEST, ModeReason.HOSTNAME
    if protocol != "https:":
        return Mode.TEST, ModeReason.PROTOCOL
    return Mode.LIVE, ModeReason.HOSTNAME


async def set_mode(session: "SessionContext") -> Mode:
    """
    Fetch the tenant's mode and first factors.

    Never raises: any failure leaves the session in test mode.
    """
    try:
        data = await session.api.get(f"tenants/{session.tenant_id}/mode")
    except AuthDomainError as e:
        logger.warning(f"Problem fetching mode, defaulting to test: {e.message}")
        session.mode, session.mode_reason = Mode.TEST, ModeReason.SERVER_ERROR
        return session.mode

    data = data if isinstance(data, dict) else {}
    try:
        session.mode = Mode(data.get("mode") or Mode.TEST.value)
    except ValueError:
        logger.warning(f"Unknown mode {data.get('mode')!r}, defaulting to test")
        session.mode = Mode.TEST
    session.mode_reason = ModeReason.SERVER

    if "authentication" in data:
        session.authentication.set_first_factors(data["authentication"])

    return session.mode
