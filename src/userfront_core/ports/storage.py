"""
Local Storage Port.

Key/value string storage that survives a page reload (``window.localStorage``
in a browser). Used only by the PKCE state.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class LocalStoragePort(Protocol):
    """Port for persistent string key/value storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value. May raise when the storage is full."""
        ...

    def remove_item(self, key: str) -> None:
        ...
