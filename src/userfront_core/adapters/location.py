"""
In-memory location.

Parses the current URL with httpx and records every navigation instead of
leaving the page.
"""

import logging

import httpx

from userfront_core.ports.location import LocationPort


logger = logging.getLogger("userfront_core.adapters.location")


class InMemoryLocation(LocationPort):
    """
    In-memory implementation of LocationPort.

    ``assign`` appends the requested URL (as given) to ``navigations`` and
    moves ``href`` to the resolved destination.

    Usage:
        location = InMemoryLocation("https://example.com/login?redirect=/dashboard")
        location.assign("/dashboard")
        location.navigations  # ["/dashboard"]
    """

    def __init__(self, href: str = "http://localhost/"):
        self._url = httpx.URL(href)
        self.navigations: list[str] = []

    @property
    def href(self) -> str:
        return str(self._url)

    @property
    def protocol(self) -> str:
        return f"{self._url.scheme}:"

    @property
    def hostname(self) -> str:
        return self._url.host

    @property
    def pathname(self) -> str:
        return self._url.path or "/"

    @property
    def origin(self) -> str:
        port = f":{self._url.port}" if self._url.port else ""
        return f"{self._url.scheme}://{self._url.host}{port}"

    def assign(self, url: str) -> None:
        self.navigations.append(url)
        self._url = self._url.join(url)
        logger.debug(f"Navigated to {url}")

    def set_href(self, href: str) -> None:
        """Change the current URL without recording a navigation (history.pushState)."""
        self._url = httpx.URL(href)
