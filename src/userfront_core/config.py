"""
Client configuration.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from userfront_core.constants import API_URL


@dataclass
class AuthClientConfig:
    """Configuration for an authentication client session."""

    tenant_id: str = ""
    base_url: str = API_URL
    domain: Optional[str] = None  # Native-app domain, sent as x-origin
    href: str = "http://localhost/"  # Initial page URL for the in-memory location

    @classmethod
    def from_env(cls, prefix: str = "USERFRONT_") -> "AuthClientConfig":
        """
        Read ``USERFRONT_TENANT_ID``, ``USERFRONT_BASE_URL``,
        ``USERFRONT_DOMAIN`` and ``USERFRONT_HREF``.
        """
        return cls(
            tenant_id=os.environ.get(f"{prefix}TENANT_ID", ""),
            base_url=os.environ.get(f"{prefix}BASE_URL") or API_URL,
            domain=os.environ.get(f"{prefix}DOMAIN") or None,
            href=os.environ.get(f"{prefix}HREF") or "http://localhost/",
        )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AuthClientConfig":
        """Build from a dict; accepts snake_case or camelCase keys."""
        data = data or {}
        return cls(
            tenant_id=data.get("tenant_id") or data.get("tenantId") or "",
            base_url=data.get("base_url") or data.get("baseUrl") or API_URL,
            domain=data.get("domain") or None,
            href=data.get("href") or "http://localhost/",
        )
