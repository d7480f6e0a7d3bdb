"""
Signup dispatcher.

Routes ``signup(method=...)`` to the matching strategy.
"""

from typing import Any, Optional, TYPE_CHECKING

from userfront_core.application.authentication import AuthResponseHooks
from userfront_core.application.link import send_passwordless_link
from userfront_core.application.password import signup_with_password
from userfront_core.application.sso import signon_with_sso
from userfront_core.application.url import RedirectArg
from userfront_core.application.verification_code import send_verification_code
from userfront_core.constants import SSO_PROVIDERS
from userfront_core.domain.errors import UserInputError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


SIGNUP_METHODS = SSO_PROVIDERS + ("password", "passwordless", "verificationCode")


async def signup(
    session: "SessionContext",
    *,
    method: Optional[str] = None,
    email: Optional[str] = None,
    username: Optional[str] = None,
    name: Optional[str] = None,
    phone_number: Optional[str] = None,
    password: Optional[str] = None,
    channel: str = "sms",
    data: Optional[dict[str, Any]] = None,
    options: Optional[dict[str, Any]] = None,
    redirect: RedirectArg = None,
    hooks: Optional[AuthResponseHooks] = None,
) -> Any:
    """
    Register a user with the given method.

    ``data`` holds custom user fields.

    Raises:
        UserInputError: ``method`` missing or unknown
    """
    if not method:
        raise UserInputError('signup called without "method" property.')

    if method in SSO_PROVIDERS:
        return signon_with_sso(session, method, redirect)
    if method == "password":
        return await signup_with_password(
            session,
            email=email,
            username=username,
            name=name,
            password=password,
            user_data=data,
            redirect=redirect,
            hooks=hooks,
        )
    if method == "passwordless":
        return await send_passwordless_link(
            session,
            email=email,
            name=name,
            username=username,
            user_data=data,
            options=options,
        )
    if method == "verificationCode":
        return await send_verification_code(
            session,
            channel=channel,
            phone_number=phone_number,
            email=email,
            name=name,
            username=username,
            user_data=data,
        )

    raise UserInputError(
        'signup called with invalid "method" property.',
        details={"method": method, "allowed": list(SIGNUP_METHODS)},
    )
