"""
Dependency Injector integration for userfront-core.

Provides an optional IoC Container with a pre-configured session and
client. Host applications can extend this container or use it directly.

Usage:
    from userfront_core.contrib.dependency_injector import AuthClientContainer

    class AppContainer(AuthClientContainer):
        # Keep cookies somewhere other than memory
        cookie_jar = providers.Singleton(MyRequestCookieJar)

    container = AppContainer()
    container.config.from_dict({"tenant_id": "demo1234"})
    client = container.client()
"""

from dependency_injector import containers, providers

from userfront_core.adapters.cookies import InMemoryCookieJar
from userfront_core.adapters.location import InMemoryLocation
from userfront_core.adapters.storage import InMemoryLocalStorage
from userfront_core.client import AuthClient
from userfront_core.config import AuthClientConfig
from userfront_core.constants import API_URL
from userfront_core.factory import create_session


class AuthClientContainer(containers.DeclarativeContainer):
    """
    IoC Container for the authentication client.

    External dependencies (can be overridden by host app):
    - cookie_jar: CookieJarPort implementation (default: InMemoryCookieJar)
    - local_storage: LocalStoragePort implementation (default: InMemoryLocalStorage)
    - location: LocationPort implementation (default: InMemoryLocation at config.href)
    - transport: httpx transport (default: None, real network)
    - clock: callable returning epoch seconds (default: None, time.time)

    Config (flat):
    - tenant_id, base_url, domain, href
    """

    config = providers.Configuration(
        default={
            "tenant_id": "",
            "base_url": API_URL,
            "domain": None,
            "href": "http://localhost/",
        }
    )

    # ═══════════════════════════════════════════════════════════════
    # CONFIGURATION
    # ═══════════════════════════════════════════════════════════════

    client_config = providers.Singleton(AuthClientConfig.from_mapping, config)

    # ═══════════════════════════════════════════════════════════════
    # DEFAULT ADAPTERS (can be overridden)
    # ═══════════════════════════════════════════════════════════════

    cookie_jar = providers.Singleton(InMemoryCookieJar)
    local_storage = providers.Singleton(InMemoryLocalStorage)
    location = providers.Singleton(InMemoryLocation, href=client_config.provided.href)

    transport = providers.Object(None)
    clock = providers.Object(None)

    # ═══════════════════════════════════════════════════════════════
    # SESSION & CLIENT
    # ═══════════════════════════════════════════════════════════════

    session = providers.Singleton(
        create_session,
        config=client_config,
        cookie_jar=cookie_jar,
        local_storage=local_storage,
        location=location,
        transport=transport,
        clock=clock,
    )

    client = providers.Singleton(AuthClient, session=session)
