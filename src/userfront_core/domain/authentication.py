"""
MFA / first-factor state.

Tracks which first factors the tenant allows, which second factors the
current login attempt still needs, and the short-lived first-factor token
that authorizes the second-factor request.

State machine:
    IDLE --(MFA-required response)--> AWAITING_SECOND_FACTOR
    AWAITING_SECOND_FACTOR --(MFA-required response)--> AWAITING_SECOND_FACTOR
        (the new first-factor token replaces the previous one)
    AWAITING_SECOND_FACTOR --(clear_mfa / reset_mfa / "OK" response)--> IDLE

The first-factor token is never re-validated locally; its expiry is
enforced by the server.
"""

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from userfront_core.domain.value_objects import FactorDescriptor


logger = logging.getLogger("userfront_core.domain.authentication")


class MfaStatus(str, Enum):
    """Status of the multi-factor flow."""

    IDLE = "idle"
    AWAITING_SECOND_FACTOR = "awaiting_second_factor"


def is_mfa_required_response(response: Any) -> bool:
    """True if an API response asks for a second factor."""
    if not isinstance(response, Mapping):
        return False
    return bool(response.get("isMfaRequired") or response.get("firstFactorToken"))


def _parse_factors(factors: Any) -> list[FactorDescriptor]:
    if not isinstance(factors, list):
        return []
    return [FactorDescriptor.from_dict(f) for f in factors if isinstance(f, Mapping)]


class AuthenticationState:
    """
    Per-session MFA state.

    Invariant: ``first_factor_token`` is not None if and only if a second
    factor is pending. None of the methods raise; bad input is logged and
    ignored because the server remains the only authority.

    Usage:
        state = AuthenticationState(lambda: "tenant-1")
        state.set_first_factors({"firstFactors": [{"strategy": "password", "channel": "email"}]})

        state.handle_mfa_required(response)
        if state.is_mfa_required():
            headers = state.get_mfa_headers()
    """

    def __init__(self, get_tenant_id: Optional[Callable[[], str]] = None):
        self._get_tenant_id = get_tenant_id or (lambda: "")
        self.first_factors: list[FactorDescriptor] = []
        self.second_factors: list[FactorDescriptor] = []
        self.first_factor_token: Optional[str] = None

    @property
    def status(self) -> MfaStatus:
        if self.first_factor_token is not None:
            return MfaStatus.AWAITING_SECOND_FACTOR
        return MfaStatus.IDLE

    def set_first_factors(self, authentication: Any) -> None:
        """Replace the tenant's first factors from an ``authentication`` config object."""
        if not self._get_tenant_id():
            logger.warning(
                "set_first_factors called without a tenant ID; ignoring authentication config"
            )
            return
        if not isinstance(authentication, Mapping) or not isinstance(
            authentication.get("firstFactors"), list
        ):
            logger.warning(
                f"set_first_factors called with an invalid authentication config: {authentication!r}"
            )
            return
        self.first_factors = _parse_factors(authentication["firstFactors"])
        logger.debug(f"First factors set: {len(self.first_factors)}")

    def is_mfa_required(self) -> bool:
        return self.first_factor_token is not None

    def handle_mfa_required(self, response: Any) -> None:
        """
        Update state from an authentication response.

        An MFA-required response overwrites the second factors and the
        first-factor token unconditionally. A fully successful response
        (``message == "OK"``) clears the transient state. Anything else
        is ignored.
        """
        if not is_mfa_required_response(response):
            if isinstance(response, Mapping) and response.get("message") == "OK":
                self.clear_mfa()
            return

        authentication = response.get("authentication")
        if not isinstance(authentication, Mapping):
            authentication = {}
        self.second_factors = _parse_factors(authentication.get("secondFactors"))
        self.first_factor_token = response.get("firstFactorToken") or None
        logger.debug(
            f"MFA required: {len(self.second_factors)} second factor(s) available"
        )

    def get_mfa_headers(self) -> dict[str, str]:
        """Bearer header carrying the first-factor token, if one is pending."""
        if not self.first_factor_token:
            return {}
        return {"authorization": f"Bearer {self.first_factor_token}"}

    def clear_mfa(self) -> None:
        """Drop the pending second step. Tenant first factors are kept."""
        self.second_factors = []
        self.first_factor_token = None

    def reset_mfa(self) -> None:
        """Return to the uninitialized state (used on tenant switch)."""
        self.clear_mfa()
        self.first_factors = []
