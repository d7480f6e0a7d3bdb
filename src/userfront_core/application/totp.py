"""
TOTP strategy: authenticator code or backup code.

Used as a first factor (with a user identifier) or, while a first-factor
token is pending, as the second factor.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import AuthResponseHooks, send_auth_request
from userfront_core.application.url import RedirectArg
from userfront_core.domain.errors import UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.totp")


async def login_with_totp(
    session: "SessionContext",
    *,
    totp_code: Optional[str] = None,
    backup_code: Optional[str] = None,
    user_id: Optional[int] = None,
    user_uuid: Optional[str] = None,
    email_or_username: Optional[str] = None,
    email: Optional[str] = None,
    username: Optional[str] = None,
    phone_number: Optional[str] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> dict[str, Any]:
    if not totp_code and not backup_code:
        raise UserInputError('login_with_totp requires "totp_code" or "backup_code"')

    return await send_auth_request(
        session,
        "POST",
        "auth/totp",
        {
            "totpCode": totp_code,
            "backupCode": backup_code,
            "userId": user_id,
            "userUuid": user_uuid,
            "emailOrUsername": email_or_username,
            "email": email,
            "username": username,
            "phoneNumber": phone_number,
        },
        redirect=redirect,
        hooks=hooks,
    )


async def get_totp(session: "SessionContext") -> dict[str, Any]:
    """Fetch the logged-in user's TOTP setup (QR code, backup codes)."""
    access_token = session.tokens.access_token
    if not access_token:
        raise UserInputError("get_totp() was called without a JWT access token.")
    return await session.api.get(
        "auth/totp", headers={"authorization": f"Bearer {access_token}"}
    )
