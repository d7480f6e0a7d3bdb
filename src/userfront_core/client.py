"""
AuthClient façade.

Bundles a ``SessionContext`` with every public operation so host code can
work with a single object instead of passing the session around.
"""

from typing import Any, Callable, Optional

from userfront_core.adapters.jwt import verify_token
from userfront_core.application.link import send_login_link, send_passwordless_link
from userfront_core.application.login import login
from userfront_core.application.logout import logout, redirect_if_logged_in
from userfront_core.application.mode import set_mode
from userfront_core.application.password import (
    login_with_password_migrate,
    send_reset_link,
    update_password,
)
from userfront_core.application.refresh import refresh
from userfront_core.application.saml import complete_saml_login
from userfront_core.application.session import SessionInfo, get_session
from userfront_core.application.signup import signup
from userfront_core.application.sso import get_provider_link
from userfront_core.application.totp import get_totp
from userfront_core.application.verification_code import send_verification_code
from userfront_core.application.authentication import AuthResponseHooks
from userfront_core.application.url import RedirectArg
from userfront_core.context import SessionContext


class AuthClient:
    """
    High-level client for one session.

    Usage:
        client = AuthClient(create_session(AuthClientConfig(tenant_id="demo1234")))
        await client.set_mode()
        await client.login(method="password", email="a@b.c", password="...")
        if (await client.get_session()).is_logged_in:
            print(client.user.email)
    """

    def __init__(self, session: Optional[SessionContext] = None):
        self.session = session if session is not None else SessionContext()

    def init(self, tenant_id: str, base_url: Optional[str] = None, domain: Optional[str] = None) -> None:
        self.session.init(tenant_id, base_url=base_url, domain=domain)

    def add_init_callback(self, callback: Callable[[dict[str, Any]], Any]) -> None:
        self.session.add_init_callback(callback)

    @property
    def tokens(self):
        return self.session.tokens

    @property
    def user(self):
        return self.session.user

    async def set_mode(self):
        return await set_mode(self.session)

    # ═══════════════════════════════════════════════════════════════
    # LOGIN / SIGNUP
    # ═══════════════════════════════════════════════════════════════

    async def login(self, **kwargs: Any) -> Any:
        return await login(self.session, **kwargs)

    async def signup(self, **kwargs: Any) -> Any:
        return await signup(self.session, **kwargs)

    async def login_with_password_migrate(self, **kwargs: Any) -> Any:
        return await login_with_password_migrate(self.session, **kwargs)

    def get_provider_link(self, provider: str, redirect: RedirectArg = None) -> str:
        return get_provider_link(self.session, provider, redirect)

    async def send_login_link(self, email: str) -> Any:
        return await send_login_link(self.session, email)

    async def send_passwordless_link(self, **kwargs: Any) -> Any:
        return await send_passwordless_link(self.session, **kwargs)

    async def send_verification_code(self, **kwargs: Any) -> Any:
        return await send_verification_code(self.session, **kwargs)

    async def get_totp(self) -> Any:
        return await get_totp(self.session)

    async def complete_saml_login(self) -> None:
        await complete_saml_login(self.session)

    # ═══════════════════════════════════════════════════════════════
    # PASSWORD RESET
    # ═══════════════════════════════════════════════════════════════

    async def send_reset_link(self, email: str) -> Any:
        return await send_reset_link(self.session, email)

    async def update_password(self, **kwargs: Any) -> Any:
        return await update_password(self.session, **kwargs)

    reset_password = update_password

    # ═══════════════════════════════════════════════════════════════
    # SESSION
    # ═══════════════════════════════════════════════════════════════

    async def get_session(self) -> SessionInfo:
        return await get_session(self.session)

    async def refresh(self) -> Any:
        return await refresh(self.session)

    async def logout(self, redirect: RedirectArg = None) -> Any:
        return await logout(self.session, redirect=redirect)

    async def redirect_if_logged_in(self, redirect: RedirectArg = None) -> None:
        await redirect_if_logged_in(self.session, redirect=redirect)

    async def verify_token(self, token: str) -> dict[str, Any]:
        return await verify_token(self.session, token)


__all__ = ["AuthClient", "AuthResponseHooks"]
