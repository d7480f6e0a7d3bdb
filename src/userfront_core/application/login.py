"""
Login dispatcher.

Routes ``login(method=...)`` to the matching strategy.
"""

from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import AuthResponseHooks
from userfront_core.application.link import login_with_link, send_passwordless_link
from userfront_core.application.password import login_with_password
from userfront_core.application.saml import complete_saml_login
from userfront_core.application.sso import signon_with_sso
from userfront_core.application.totp import login_with_totp
from userfront_core.application.url import RedirectArg
from userfront_core.application.verification_code import login_with_verification_code
from userfront_core.constants import SSO_PROVIDERS
from userfront_core.domain.errors import UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


LOGIN_METHODS = SSO_PROVIDERS + (
    "password",
    "passwordless",
    "link",
    "totp",
    "verificationCode",
    "saml",
)


async def login(
    session: "SessionContext",
    *,
    method: Optional[str] = None,
    # User identifiers
    user_id: Optional[int] = None,
    user_uuid: Optional[str] = None,
    email: Optional[str] = None,
    username: Optional[str] = None,
    email_or_username: Optional[str] = None,
    phone_number: Optional[str] = None,
    # Password
    password: Optional[str] = None,
    # Link
    token: Optional[str] = None,
    uuid: Optional[str] = None,
    # TOTP
    totp_code: Optional[str] = None,
    backup_code: Optional[str] = None,
    # Verification code
    channel: str = "sms",
    verification_code: Optional[str] = None,
    # Other
    options: Optional[dict[str, Any]] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> Any:
    """
    Log a user in with the given method.

    Raises:
        UserInputError: ``method`` missing or unknown
    """
    if not method:
        raise UserInputError('login called without "method" property.')

    if method in SSO_PROVIDERS:
        return signon_with_sso(session, method, redirect)
    if method == "password":
        return await login_with_password(
            session,
            email=email,
            username=username,
            email_or_username=email_or_username,
            password=password,
            options=options,
            redirect=redirect,
            hooks=hooks,
        )
    if method == "passwordless":
        return await send_passwordless_link(session, email=email, options=options)
    if method == "link":
        return await login_with_link(
            session, token=token, uuid=uuid, redirect=redirect, hooks=hooks
        )
    if method == "totp":
        return await login_with_totp(
            session,
            totp_code=totp_code,
            backup_code=backup_code,
            user_id=user_id,
            user_uuid=user_uuid,
            email_or_username=email_or_username,
            email=email,
            username=username,
            phone_number=phone_number,
            redirect=redirect,
            hooks=hooks,
        )
    if method == "verificationCode":
        return await login_with_verification_code(
            session,
            channel=channel,
            verification_code=verification_code,
            phone_number=phone_number,
            email=email,
            redirect=redirect,
            hooks=hooks,
        )
    if method == "saml":
        return await complete_saml_login(session)

    raise UserInputError(
        'login called with invalid "method" property.',
        details={"method": method, "allowed": list(LOGIN_METHODS)},
    )
