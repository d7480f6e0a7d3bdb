"""
PKCE state.

Native and mobile callers start a flow with ``?code_challenge=...``. The
challenge is cached in local storage for five minutes so it survives a
reload or an SSO round-trip, attached to every authentication request,
and consumed when the resulting authorization code is handed back.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

import httpx

from userfront_core.application.url import get_query_attr
from userfront_core.constants import (
    PKCE_CODE_CHALLENGE_EXPIRES_AT_KEY,
    PKCE_CODE_CHALLENGE_KEY,
    PKCE_TTL_SECONDS,
)

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.pkce")


class PkceState:
    """
    Code challenge for the current flow.

    ``code_challenge == ""`` means PKCE is not in use.
    """

    def __init__(self, session: "SessionContext"):
        self._session = session
        self.code_challenge: str = ""

    @property
    def uses_pkce(self) -> bool:
        return bool(self.code_challenge)

    def _now_millis(self) -> int:
        return int(self._session.clock() * 1000)

    def read_pkce_data_from_local_storage(self) -> Optional[str]:
        storage = self._session.local_storage
        code_challenge = storage.get_item(PKCE_CODE_CHALLENGE_KEY)
        if not code_challenge:
            return None
        expires_at = storage.get_item(PKCE_CODE_CHALLENGE_EXPIRES_AT_KEY)
        try:
            if expires_at and int(expires_at) > self._now_millis():
                return code_challenge
        except ValueError:
            logger.warning(f"Ignoring malformed PKCE expiry {expires_at!r}")
        return None

    def write_pkce_data_to_local_storage(self, code_challenge: str) -> None:
        if not code_challenge:
            self.clear_pkce_data_from_local_storage()
            return
        self.code_challenge = code_challenge
        expires_at = self._now_millis() + PKCE_TTL_SECONDS * 1000
        storage = self._session.local_storage
        try:
            storage.set_item(PKCE_CODE_CHALLENGE_KEY, code_challenge)
            storage.set_item(PKCE_CODE_CHALLENGE_EXPIRES_AT_KEY, str(expires_at))
        except Exception as e:
            logger.warning(f"Could not cache PKCE code challenge: {str(e)}")

    def clear_pkce_data_from_local_storage(self) -> None:
        storage = self._session.local_storage
        try:
            storage.remove_item(PKCE_CODE_CHALLENGE_KEY)
            storage.remove_item(PKCE_CODE_CHALLENGE_EXPIRES_AT_KEY)
        except Exception as e:
            logger.warning(f"Could not clear PKCE code challenge: {str(e)}")

    def setup_pkce(self) -> bool:
        """
        Activate the challenge for this flow.

        The URL always wins and is re-cached; otherwise an unexpired cached
        value is used. With neither, the cache is cleared.
        """
        from_query = get_query_attr(self._session, "code_challenge")
        if from_query:
            self.write_pkce_data_to_local_storage(from_query)
            return True

        from_storage = self.read_pkce_data_from_local_storage()
        if from_storage:
            self.code_challenge = from_storage
            return True

        self.code_challenge = ""
        self.clear_pkce_data_from_local_storage()
        return False

    def get_pkce_request_query_params(self) -> dict[str, str]:
        if not self.uses_pkce:
            return {}
        return {"code_challenge": self.code_challenge}

    def default_handle_pkce_required(
        self, authorization_code: Optional[str], url: Optional[str], data: Any = None
    ) -> None:
        """Send the authorization code back to the native caller's URL."""
        if not url or not authorization_code:
            return
        if not self.uses_pkce:
            logger.warning(
                "Redirecting with a PKCE authorization code, but no PKCE challenge "
                "code is present in the client. This is unexpected."
            )
        target = httpx.URL(url).copy_set_param("authorization_code", authorization_code)
        self.clear_pkce_data_from_local_storage()
        self.code_challenge = ""
        self._session.location.assign(str(target))
