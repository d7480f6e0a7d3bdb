"""
In-memory local storage.
"""

from typing import Dict, Optional

from userfront_core.ports.storage import LocalStoragePort


class InMemoryLocalStorage(LocalStoragePort):
    """
    In-memory implementation of LocalStoragePort.

    Suitable for development and testing.
    """

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        """Clear all items (for testing)."""
        self._items.clear()
