"""
Adapters for the host environment and the authentication API.
"""

from userfront_core.adapters.cookies import InMemoryCookieJar, StoredCookie
from userfront_core.adapters.http import ApiClient, reduce_slashes
from userfront_core.adapters.jwt import decode_jwt_payload, verify_token
from userfront_core.adapters.location import InMemoryLocation
from userfront_core.adapters.storage import InMemoryLocalStorage

__all__ = [
    "InMemoryCookieJar",
    "StoredCookie",
    "ApiClient",
    "reduce_slashes",
    "decode_jwt_payload",
    "verify_token",
    "InMemoryLocation",
    "InMemoryLocalStorage",
]
