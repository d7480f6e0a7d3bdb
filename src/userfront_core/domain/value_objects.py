"""
Domain value objects for the authentication client.

Value objects are immutable and have no identity: they are defined
only by their attributes. Parsers accept the camelCase payloads sent
by the authentication API.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Union


# ═══════════════════════════════════════════════════════════════
# MODE
# ═══════════════════════════════════════════════════════════════


class Mode(str, Enum):
    """Operating mode of the tenant. Controls cookie security defaults."""

    TEST = "test"
    LIVE = "live"


class ModeReason(str, Enum):
    """Why the current mode was chosen."""

    HOSTNAME = "hostname"  # Local or private-network hostname (or a public one)
    PROTOCOL = "protocol"  # Page not served over https
    SERVER = "server"  # Reported by the tenant mode endpoint
    SERVER_ERROR = "server_error"  # Mode lookup failed, fell back to test


# ═══════════════════════════════════════════════════════════════
# TOKENS & COOKIES
# ═══════════════════════════════════════════════════════════════


class TokenType(str, Enum):
    """Token kinds persisted as cookies."""

    ACCESS = "access"
    ID = "id"
    REFRESH = "refresh"


@dataclass(frozen=True)
class CookieOptions:
    """
    Attributes applied when a token cookie is written.

    ``None`` means "not specified", so options can be layered with
    ``merged()`` (server-supplied options over the per-type defaults).
    ``expires`` is a number of days or an absolute datetime.
    """

    secure: Optional[bool] = None
    same_site: Optional[str] = None
    domain: Optional[str] = None
    path: Optional[str] = None
    expires: Optional[Union[int, float, datetime]] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["CookieOptions"]:
        if not data:
            return None
        return cls(
            secure=data.get("secure"),
            same_site=data.get("sameSite"),
            domain=data.get("domain"),
            path=data.get("path"),
            expires=data.get("expires"),
        )

    def merged(self, other: Optional["CookieOptions"]) -> "CookieOptions":
        """Return a copy where every field set on ``other`` wins."""
        if other is None:
            return self
        overrides = {
            name: getattr(other, name)
            for name in ("secure", "same_site", "domain", "path", "expires")
            if getattr(other, name) is not None
        }
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "secure": self.secure,
            "sameSite": self.same_site,
            "domain": self.domain,
            "path": self.path,
            "expires": self.expires,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class IssuedToken:
    """A single token as issued by the API: value plus optional cookie options."""

    value: str
    cookie_options: Optional[CookieOptions] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["IssuedToken"]:
        if not data or not data.get("value"):
            return None
        return cls(
            value=data["value"],
            cookie_options=CookieOptions.from_dict(data.get("cookieOptions")),
        )


@dataclass(frozen=True)
class IssuedTokens:
    """
    The ``tokens`` object of a successful authentication response.

    ``access`` and ``id`` are a documented precondition of a token
    issuance; ``refresh`` is optional.
    """

    access: IssuedToken
    id: IssuedToken
    refresh: Optional[IssuedToken] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IssuedTokens":
        return cls(
            access=IssuedToken.from_dict(data["access"]),
            id=IssuedToken.from_dict(data["id"]),
            refresh=IssuedToken.from_dict(data.get("refresh")),
        )

    def items(self) -> list[tuple[TokenType, IssuedToken]]:
        pairs = [(TokenType.ACCESS, self.access), (TokenType.ID, self.id)]
        if self.refresh is not None:
            pairs.append((TokenType.REFRESH, self.refresh))
        return [(token_type, token) for token_type, token in pairs if token]


# ═══════════════════════════════════════════════════════════════
# FACTORS
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FactorDescriptor:
    """
    An authentication factor, e.g. ``{"strategy": "totp", "channel": "authenticator"}``.

    Used both for the tenant's configured first factors and for the
    second factors required mid-flow.
    """

    strategy: str
    channel: str
    extra: dict = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FactorDescriptor":
        extra = {k: v for k, v in data.items() if k not in ("strategy", "channel")}
        return cls(
            strategy=data.get("strategy", ""),
            channel=data.get("channel", ""),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "strategy": self.strategy, "channel": self.channel}
