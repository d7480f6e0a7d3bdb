"""
Cookie Jar Port.

Defines the interface to the host's cookie storage (a browser document,
an embedded webview, or an in-memory jar for server-side rendering).
"""

from typing import Protocol, Optional, runtime_checkable

from userfront_core.domain.value_objects import CookieOptions


@runtime_checkable
class CookieJarPort(Protocol):
    """
    Port for reading and writing cookies.

    Cookies are scoped by ``(name, domain, path)``. Removal only affects a
    cookie whose domain and path match exactly, which is why the token
    store tries every plausible combination when deleting.

    Implementations may raise on storage failure; callers in this library
    swallow such errors.
    """

    def get(self, name: str) -> Optional[str]:
        """Return the value visible under ``name``, or None."""
        ...

    def set(self, name: str, value: str, options: CookieOptions) -> None:
        """Write a cookie using the given attributes."""
        ...

    def remove(
        self, name: str, domain: Optional[str] = None, path: Optional[str] = None
    ) -> None:
        """Remove the cookie with this exact name/domain/path, if present."""
        ...
