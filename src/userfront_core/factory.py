"""
Factory functions for automatic session creation.

Implements the 'if not provided, create' pattern: every collaborator that is
not passed in is built from configuration or an in-memory default.
"""

import logging
from typing import Callable, Optional

import httpx

from userfront_core.adapters.location import InMemoryLocation
from userfront_core.config import AuthClientConfig
from userfront_core.context import SessionContext
from userfront_core.ports.cookies import CookieJarPort
from userfront_core.ports.location import LocationPort
from userfront_core.ports.storage import LocalStoragePort


logger = logging.getLogger("userfront_core.factory")


def create_default_config() -> AuthClientConfig:
    """Configuration from ``USERFRONT_*`` environment variables."""
    config = AuthClientConfig.from_env()
    if not config.tenant_id:
        logger.warning("USERFRONT_TENANT_ID is not set; session will not be initialized")
    return config


def create_session(
    config: Optional[AuthClientConfig] = None,
    cookie_jar: Optional[CookieJarPort] = None,
    local_storage: Optional[LocalStoragePort] = None,
    location: Optional[LocationPort] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable[[], float]] = None,
) -> SessionContext:
    """
    Create a session and initialize it for the configured tenant.

    Usage:
        session = create_session(AuthClientConfig(tenant_id="demo1234"))
    """
    config = config or create_default_config()
    session = SessionContext(
        cookie_jar=cookie_jar,
        local_storage=local_storage,
        location=location if location is not None else InMemoryLocation(config.href),
        transport=transport,
        clock=clock,
    )
    if config.tenant_id:
        session.init(config.tenant_id, base_url=config.base_url, domain=config.domain)
    return session
