"""
Verification code strategy (SMS or email).
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import (
    AuthResponseHooks,
    compact_payload,
    send_auth_request,
)
from userfront_core.application.url import RedirectArg
from userfront_core.domain.errors import UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.verification_code")


def _check_channel(channel: str, phone_number: Optional[str], email: Optional[str]) -> None:
    if channel == "sms" and not phone_number:
        raise UserInputError('SMS verification code requires "phoneNumber"')
    if channel == "email" and not email:
        raise UserInputError('Email verification code requires "email"')


async def send_verification_code(
    session: "SessionContext",
    *,
    channel: str = "sms",
    phone_number: Optional[str] = None,
    email: Optional[str] = None,
    name: Optional[str] = None,
    username: Optional[str] = None,
    user_data: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Send a one-time code to a phone number or email address.

    The request carries the pending first-factor token, so the same call
    sends the code when SMS or email is used as a second factor.
    """
    _check_channel(channel, phone_number, email)
    payload = compact_payload(
        {
            "channel": channel,
            "phoneNumber": phone_number,
            "email": email,
            "name": name,
            "username": username,
            "data": user_data,
        }
    )
    return await session.api.post(
        "auth/code",
        {**payload, "tenantId": session.tenant_id},
        headers=session.authentication.get_mfa_headers(),
        params=session.pkce.get_pkce_request_query_params(),
    )


async def login_with_verification_code(
    session: "SessionContext",
    *,
    channel: str = "sms",
    verification_code: Optional[str] = None,
    phone_number: Optional[str] = None,
    email: Optional[str] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    if not verification_code:
        raise UserInputError('login_with_verification_code requires "verification_code"')
    _check_channel(channel, phone_number, email)

    return await send_auth_request(
        session,
        "PUT",
        "auth/code",
        {
            "channel": channel,
            "verificationCode": verification_code,
            "phoneNumber": phone_number,
            "email": email,
        },
        redirect=redirect,
        hooks=hooks,
    )
