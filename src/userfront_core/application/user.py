"""
Current user.

Profile fields are read from the ID token each time they are accessed, so
they always reflect the latest token. Roles come from the access token.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from userfront_core.adapters.jwt import decode_jwt_payload
from userfront_core.application.refresh import refresh

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.application.user")

PROFILE_FIELDS = (
    "email",
    "phoneNumber",
    "username",
    "name",
    "image",
    "data",
    "confirmedAt",
    "createdAt",
    "updatedAt",
    "mode",
    "userId",
    "userUuid",
    "tenantId",
    "isConfirmed",
)


def _claim(name: str):
    def getter(self: "User") -> Any:
        return self.claims.get(name)

    getter.__doc__ = f"``{name}`` from the ID token."
    return property(getter)


class User:
    """
    Profile of the logged-in user.

    Usage:
        session.user.email
        session.user.has_role("admin")
        await session.user.update({"name": "Jane Doe"})
    """

    email = _claim("email")
    phone_number = _claim("phoneNumber")
    username = _claim("username")
    name = _claim("name")
    image = _claim("image")
    data = _claim("data")
    confirmed_at = _claim("confirmedAt")
    created_at = _claim("createdAt")
    updated_at = _claim("updatedAt")
    mode = _claim("mode")
    user_id = _claim("userId")
    user_uuid = _claim("userUuid")
    tenant_id = _claim("tenantId")
    is_confirmed = _claim("isConfirmed")

    def __init__(self, session: "SessionContext"):
        self._session = session

    @property
    def claims(self) -> dict[str, Any]:
        return decode_jwt_payload(self._session.tokens.id_token) or {}

    def to_dict(self) -> dict[str, Any]:
        claims = self.claims
        return {name: claims.get(name) for name in PROFILE_FIELDS}

    def has_role(self, role: str, tenant_id: Optional[str] = None) -> bool:
        """Whether the access token grants ``role`` for the tenant."""
        if not self._session.tenant_id:
            return False
        payload = decode_jwt_payload(self._session.tokens.access_token)
        if not payload:
            return False
        authorization = payload.get("authorization")
        if not isinstance(authorization, dict):
            return False
        tenant_authorization = authorization.get(tenant_id or self._session.tenant_id)
        if not isinstance(tenant_authorization, dict):
            return False
        return role in (tenant_authorization.get("roles") or [])

    async def update(self, payload: Optional[dict[str, Any]]) -> Optional["User"]:
        """Update the user record, then refresh tokens so the profile follows."""
        if not payload:
            logger.warning("Missing user properties to update")
            return None

        await self._session.api.put(
            "self",
            payload,
            headers={"authorization": f"Bearer {self._session.tokens.access_token}"},
        )
        await refresh(self._session)
        return self

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id!r}, email={self.email!r})"
