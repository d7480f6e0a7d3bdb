"""
Session context.

A ``SessionContext`` is the explicit replacement for a process-wide
singleton: it holds the tenant configuration, the host environment ports
(cookies, local storage, location) and every stateful component. All
application functions take a session as their first argument.
"""

import logging
import time
from typing import Any, Callable, Optional

import httpx

from userfront_core.adapters.cookies import InMemoryCookieJar
from userfront_core.adapters.http import ApiClient
from userfront_core.adapters.location import InMemoryLocation
from userfront_core.adapters.storage import InMemoryLocalStorage
from userfront_core.application.cookies import CookiePersistence
from userfront_core.application.mode import detect_mode
from userfront_core.application.pkce import PkceState
from userfront_core.application.tokens import TokenStore
from userfront_core.application.user import User
from userfront_core.constants import API_URL
from userfront_core.domain.authentication import AuthenticationState
from userfront_core.ports.cookies import CookieJarPort
from userfront_core.ports.location import LocationPort
from userfront_core.ports.storage import LocalStoragePort


logger = logging.getLogger("userfront_core.context")

InitCallback = Callable[[dict[str, Any]], Any]


def normalize_base_url(base_url: Optional[str]) -> str:
    """Default to the public API and always end with a slash."""
    base_url = base_url or API_URL
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


class SessionContext:
    """
    Tenant configuration plus session state for one browser-like session.

    Usage:
        session = SessionContext(location=InMemoryLocation("https://example.com/login"))
        session.init("demo1234")

        await login(session, method="password", email="a@b.c", password="...")
        session.tokens.access_token
    """

    def __init__(
        self,
        cookie_jar: Optional[CookieJarPort] = None,
        local_storage: Optional[LocalStoragePort] = None,
        location: Optional[LocationPort] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Callable[[], float]] = None,
        timeout: float = 10.0,
    ):
        self.cookie_jar = cookie_jar if cookie_jar is not None else InMemoryCookieJar()
        self.local_storage = (
            local_storage if local_storage is not None else InMemoryLocalStorage()
        )
        self.location = location if location is not None else InMemoryLocation()
        self.clock = clock or time.time

        self.tenant_id: str = ""
        self.base_url: str = normalize_base_url(None)
        self.domain: Optional[str] = None
        self.mode, self.mode_reason = detect_mode(
            self.location.hostname, self.location.protocol
        )

        self.api = ApiClient(self, transport=transport, timeout=timeout)
        self.cookies = CookiePersistence(self)
        self.tokens = TokenStore(self)
        self.user = User(self)
        self.authentication = AuthenticationState(lambda: self.tenant_id)
        self.pkce = PkceState(self)

        self._init_callbacks: list[InitCallback] = []

    @property
    def is_initialized(self) -> bool:
        return bool(self.tenant_id)

    def init(
        self,
        tenant_id: str,
        base_url: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> None:
        """
        (Re)initialize the session for a tenant.

        Switching to a different tenant drops MFA state and in-memory token
        values; token cookies are named per tenant so they are left alone.
        An empty ``tenant_id`` is ignored with a warning.
        """
        if not tenant_id:
            logger.warning("Userfront initialized without tenant ID")
            return

        if self.tenant_id and self.tenant_id != tenant_id:
            logger.debug(f"Switching tenant {self.tenant_id} -> {tenant_id}")
            self.authentication.reset_mfa()
            self.tokens.forget()

        self.tenant_id = tenant_id
        self.base_url = normalize_base_url(base_url)
        self.domain = domain
        self.mode, self.mode_reason = detect_mode(
            self.location.hostname, self.location.protocol
        )
        self.pkce.setup_pkce()

        self._run_init_callbacks()

    def add_init_callback(self, callback: InitCallback) -> None:
        """Run ``callback({"tenantId": ...})`` once, on the next ``init``."""
        if not callable(callback):
            logger.warning(f"Ignoring non-callable init callback: {callback!r}")
            return
        self._init_callbacks.append(callback)

    def _run_init_callbacks(self) -> None:
        callbacks, self._init_callbacks = self._init_callbacks, []
        for callback in callbacks:
            try:
                callback({"tenantId": self.tenant_id})
            except Exception as e:
                logger.error(f"Init callback {callback!r} failed: {str(e)}")