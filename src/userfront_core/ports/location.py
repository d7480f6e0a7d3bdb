"""
Location Port.

The current page URL and the ability to navigate away from it.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LocationPort(Protocol):
    """
    Port for the current location (``window.location`` in a browser).

    All URL parts follow the browser conventions: ``protocol`` includes the
    trailing colon (``"https:"``) and ``pathname`` starts with a slash.
    """

    @property
    def href(self) -> str:
        ...

    @property
    def protocol(self) -> str:
        ...

    @property
    def hostname(self) -> str:
        ...

    @property
    def pathname(self) -> str:
        ...

    @property
    def origin(self) -> str:
        ...

    def assign(self, url: str) -> None:
        """Navigate to ``url`` (absolute, or relative to ``href``)."""
        ...
