"""Port interfaces (Protocols) for host environment adapters."""

from userfront_core.ports.cookies import CookieJarPort
from userfront_core.ports.location import LocationPort
from userfront_core.ports.storage import LocalStoragePort

__all__ = [
    "CookieJarPort",
    "LocationPort",
    "LocalStoragePort",
]
