"""
In-memory cookie jar.

Models browser cookie scoping closely enough for the token store: cookies
are keyed by ``(name, domain, path)`` and removal needs an exact match.
Suitable for development, testing and server-side rendering.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from userfront_core.domain.value_objects import CookieOptions
from userfront_core.ports.cookies import CookieJarPort


logger = logging.getLogger("userfront_core.adapters.cookies")

DEFAULT_PATH = "/"


@dataclass
class StoredCookie:
    """A cookie as held by the jar."""

    name: str
    value: str
    domain: Optional[str]
    path: str
    options: CookieOptions


class InMemoryCookieJar(CookieJarPort):
    """
    In-memory implementation of CookieJarPort.

    A cookie written without a path gets ``/``, as in js-cookie. When several
    cookies share a name, ``get`` returns the most recently written one.

    Usage:
        jar = InMemoryCookieJar()
        jar.set("access.tenant-1", "eyJ...", CookieOptions(secure=True, same_site="Lax"))
        jar.get("access.tenant-1")
    """

    def __init__(self):
        # Key: (name, domain, path) -> StoredCookie, ordered by write time
        self._cookies: Dict[tuple[str, Optional[str], str], StoredCookie] = {}

    @staticmethod
    def _key(name: str, domain: Optional[str], path: Optional[str]):
        return (name, domain or None, path or DEFAULT_PATH)

    def get(self, name: str) -> Optional[str]:
        for cookie in reversed(list(self._cookies.values())):
            if cookie.name == name:
                return cookie.value
        return None

    def set(self, name: str, value: str, options: CookieOptions) -> None:
        key = self._key(name, options.domain, options.path)
        self._cookies.pop(key, None)
        self._cookies[key] = StoredCookie(
            name=name,
            value=value,
            domain=key[1],
            path=key[2],
            options=options,
        )
        logger.debug(f"Set cookie {name} (domain={key[1]}, path={key[2]})")

    def remove(
        self, name: str, domain: Optional[str] = None, path: Optional[str] = None
    ) -> None:
        self._cookies.pop(self._key(name, domain, path), None)

    def get_cookie(
        self, name: str, domain: Optional[str] = None, path: Optional[str] = None
    ) -> Optional[StoredCookie]:
        """Return the exact cookie for this name/domain/path."""
        return self._cookies.get(self._key(name, domain, path))

    def all(self, name: Optional[str] = None) -> list[StoredCookie]:
        return [c for c in self._cookies.values() if name is None or c.name == name]

    def clear(self) -> None:
        """Clear all cookies (for testing)."""
        self._cookies.clear()
