"""
Cookie persistence for tokens.

Translates a token write or delete into cookie operations, applying the
per-token-type security policy:

- access / id: ``secure`` in live mode, ``SameSite=Lax``
- refresh: always ``SameSite=Strict``, whatever the server supplied

Cookie I/O never raises: a missing token is always recoverable (logged out).
"""

import logging
from typing import Optional, TYPE_CHECKING

from userfront_core.domain.value_objects import CookieOptions, Mode, TokenType

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.cookies")

REFRESH_SAME_SITE = "Strict"


def primary_domain(hostname: str) -> Optional[str]:
    """The registrable two-label domain, e.g. ``example.com`` for ``a.b.example.com``."""
    labels = [label for label in (hostname or "").split(".") if label]
    if len(labels) < 2:
        return None
    return ".".join(labels[-2:])


class CookiePersistence:
    """
    Cookie side of the token store.

    Server-supplied cookie options are recorded per cookie name at issuance
    and layered over the defaults on every later write.
    """

    def __init__(self, session: "SessionContext"):
        self._session = session
        self._options_by_name: dict[str, CookieOptions] = {}

    # ═══════════════════════════════════════════════════════════════
    # OPTIONS
    # ═══════════════════════════════════════════════════════════════

    def default_options(self, token_type: Optional[TokenType] = None) -> CookieOptions:
        options = CookieOptions(
            secure=self._session.mode == Mode.LIVE,
            same_site="Lax",
        )
        if token_type == TokenType.REFRESH:
            options = CookieOptions(secure=options.secure, same_site=REFRESH_SAME_SITE)
        return options

    def set_options_by_name(
        self, cookie_name: str, options: Optional[CookieOptions]
    ) -> None:
        if not cookie_name:
            logger.warning("Tried to set cookie options without a cookie name")
            return
        self._options_by_name[cookie_name] = options or CookieOptions()

    def set_options_by_token_type(
        self, token_type: TokenType, options: Optional[CookieOptions]
    ) -> None:
        self.set_options_by_name(self.cookie_name(token_type), options)

    def get_options_by_name(
        self, cookie_name: str, token_type: Optional[TokenType] = None
    ) -> CookieOptions:
        options = self.default_options(token_type).merged(
            self._options_by_name.get(cookie_name)
        )
        if token_type == TokenType.REFRESH and options.same_site != REFRESH_SAME_SITE:
            options = options.merged(CookieOptions(same_site=REFRESH_SAME_SITE))
        return options

    def get_options_by_token_type(self, token_type: TokenType) -> CookieOptions:
        return self.get_options_by_name(self.cookie_name(token_type), token_type)

    def clear_options(self) -> None:
        self._options_by_name.clear()

    # ═══════════════════════════════════════════════════════════════
    # NAMES & CANDIDATES
    # ═══════════════════════════════════════════════════════════════

    def cookie_name(self, token_type: TokenType) -> str:
        tenant_id = self._session.tenant_id
        if not tenant_id:
            logger.warning(
                f"Tried to get the {token_type.value} token cookie name without a tenant ID set"
            )
            return ""
        return f"{token_type.value}.{tenant_id}"

    def candidate_domains(self) -> list[Optional[str]]:
        hostname = self._session.location.hostname
        primary = primary_domain(hostname)
        candidates: list[Optional[str]] = [None]
        for domain in (
            hostname,
            f".{hostname}" if hostname else None,
            primary,
            f".{primary}" if primary else None,
        ):
            if domain and domain not in candidates:
                candidates.append(domain)
        return candidates

    def candidate_paths(self) -> list[Optional[str]]:
        candidates: list[Optional[str]] = [None]
        for path in (self._session.location.pathname, "/"):
            if path and path not in candidates:
                candidates.append(path)
        return candidates

    # ═══════════════════════════════════════════════════════════════
    # COOKIE I/O
    # ═══════════════════════════════════════════════════════════════

    def read(self, cookie_name: str) -> Optional[str]:
        if not cookie_name:
            return None
        try:
            return self._session.cookie_jar.get(cookie_name)
        except Exception as e:
            logger.warning(f"Problem reading cookie {cookie_name}: {str(e)}")
            return None

    def write(
        self, cookie_name: str, value: str, token_type: Optional[TokenType] = None
    ) -> None:
        if not cookie_name:
            return
        options = self.get_options_by_name(cookie_name, token_type)
        try:
            self._session.cookie_jar.set(cookie_name, value, options)
        except Exception as e:
            logger.warning(f"Problem setting cookie {cookie_name}: {str(e)}")

    def remove(self, cookie_name: str) -> None:
        """Remove a cookie under every domain/path it may have been set with."""
        if not cookie_name:
            return
        for domain in self.candidate_domains():
            for path in self.candidate_paths():
                try:
                    self._session.cookie_jar.remove(cookie_name, domain=domain, path=path)
                except Exception as e:
                    logger.warning(
                        f"Problem removing cookie {cookie_name} "
                        f"(domain={domain}, path={path}): {str(e)}"
                    )
