"""
Token store.

Exposes the access, ID and refresh tokens through an explicit
``get`` / ``set`` / ``delete`` interface (and a property façade on top of
it) while mirroring every change to the matching cookie.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.adapters.jwt import decode_jwt_payload
from userfront_core.domain.value_objects import IssuedTokens, TokenType

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.tokens")

_UNSET = object()


class CookieStoredValue:
    """
    A token value held in memory and mirrored to a cookie.

    Reads return the in-memory value once one has been set or deleted in
    this session, and fall back to the cookie otherwise.
    """

    def __init__(self, session: "SessionContext", token_type: TokenType):
        self._session = session
        self.token_type = token_type
        self._value: Any = _UNSET

    @property
    def name(self) -> str:
        return self._session.cookies.cookie_name(self.token_type)

    def get(self) -> Optional[str]:
        if self._value is not _UNSET:
            return self._value
        return self._session.cookies.read(self.name)

    def set(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            self.delete()
            return None
        self._value = value
        self._session.cookies.write(self.name, value, self.token_type)
        return value

    def delete(self) -> None:
        self._value = None
        self._session.cookies.remove(self.name)

    def forget(self) -> None:
        """Drop the in-memory value so the next read comes from the cookie."""
        self._value = _UNSET


class ComputedValue:
    """A read-only value; set and delete are no-ops."""

    def __init__(self, compute):
        self.compute = compute

    def get(self):
        return self.compute()

    def set(self, value):
        return value

    def delete(self) -> None:
        pass


class TokenStore:
    """
    Access, ID and refresh tokens for one session.

    Keys: ``access_token``, ``id_token``, ``refresh_token`` (read/write) and
    ``access_token_name``, ``id_token_name``, ``refresh_token_name``
    (computed, read-only). Only this store writes token cookies.

    Usage:
        store.set("access_token", "eyJ...")
        store.access_token = "eyJ..."      # same thing
        del store.access_token             # removes every cookie variant
    """

    def __init__(self, session: "SessionContext"):
        self._session = session
        self._tokens = {
            "access_token": CookieStoredValue(session, TokenType.ACCESS),
            "id_token": CookieStoredValue(session, TokenType.ID),
            "refresh_token": CookieStoredValue(session, TokenType.REFRESH),
        }
        self._values = {
            **self._tokens,
            "access_token_name": ComputedValue(lambda: session.cookies.cookie_name(TokenType.ACCESS)),
            "id_token_name": ComputedValue(lambda: session.cookies.cookie_name(TokenType.ID)),
            "refresh_token_name": ComputedValue(lambda: session.cookies.cookie_name(TokenType.REFRESH)),
        }

    def _entry(self, key: str):
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"Unknown token store key: {key}") from None

    def keys(self) -> list[str]:
        return list(self._values)

    def get(self, key: str) -> Optional[str]:
        return self._entry(key).get()

    def set(self, key: str, value: Optional[str]) -> Optional[str]:
        return self._entry(key).set(value)

    def delete(self, key: str) -> None:
        self._entry(key).delete()

    # ═══════════════════════════════════════════════════════════════
    # PROPERTY FAÇADE
    # ═══════════════════════════════════════════════════════════════

    @property
    def access_token(self) -> Optional[str]:
        return self.get("access_token")

    @access_token.setter
    def access_token(self, value: Optional[str]) -> None:
        self.set("access_token", value)

    @access_token.deleter
    def access_token(self) -> None:
        self.delete("access_token")

    @property
    def id_token(self) -> Optional[str]:
        return self.get("id_token")

    @id_token.setter
    def id_token(self, value: Optional[str]) -> None:
        self.set("id_token", value)

    @id_token.deleter
    def id_token(self) -> None:
        self.delete("id_token")

    @property
    def refresh_token(self) -> Optional[str]:
        return self.get("refresh_token")

    @refresh_token.setter
    def refresh_token(self, value: Optional[str]) -> None:
        self.set("refresh_token", value)

    @refresh_token.deleter
    def refresh_token(self) -> None:
        self.delete("refresh_token")

    @property
    def access_token_name(self) -> str:
        return self.get("access_token_name")

    @property
    def id_token_name(self) -> str:
        return self.get("id_token_name")

    @property
    def refresh_token_name(self) -> str:
        return self.get("refresh_token_name")

    # ═══════════════════════════════════════════════════════════════
    # BULK OPERATIONS
    # ═══════════════════════════════════════════════════════════════

    def set_from_issued(self, tokens: IssuedTokens) -> None:
        """Record the server's cookie options and persist every issued token."""
        for token_type, token in tokens.items():
            self._session.cookies.set_options_by_token_type(
                token_type, token.cookie_options
            )
            self.set(f"{token_type.value}_token", token.value)

    def remove_all(self) -> None:
        for key in self._tokens:
            self.delete(key)

    def forget(self) -> None:
        """Drop in-memory values (tenant switch); cookies are left alone."""
        for value in self._tokens.values():
            value.forget()


def set_cookies_and_tokens(session: "SessionContext", tokens: Any) -> None:
    """Persist a ``tokens`` payload (dict or IssuedTokens) into the token store."""
    if not isinstance(tokens, IssuedTokens):
        tokens = IssuedTokens.from_dict(tokens)
    session.tokens.set_from_issued(tokens)


def remove_all_cookies(session: "SessionContext") -> None:
    session.tokens.remove_all()


def is_token_locally_valid(session: "SessionContext", token: Optional[str]) -> bool:
    """True if the token decodes and its ``exp`` claim is still in the future."""
    payload = decode_jwt_payload(token)
    if not payload:
        return False
    exp = payload.get("exp")
    if exp is None:
        return True
    try:
        return float(exp) > session.clock()
    except (TypeError, ValueError):
        return False


def is_access_token_locally_valid(session: "SessionContext") -> bool:
    return is_token_locally_valid(session, session.tokens.access_token)


def is_refresh_token_locally_valid(session: "SessionContext") -> bool:
    return is_token_locally_valid(session, session.tokens.refresh_token)
