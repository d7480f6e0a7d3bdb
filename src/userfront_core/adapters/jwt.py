"""
JWT helpers.

Uses python-jose for decoding and signature verification. Payloads read
with ``decode_jwt_payload`` are NOT verified and must only drive local
convenience state (profile fields, expiry checks).
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from jose import jwt, JWTError

from userfront_core.domain.errors import InvalidTokenError, ServerError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.adapters.jwt")


def decode_jwt_payload(token: Optional[str]) -> Optional[dict[str, Any]]:
    """Return the unverified claims of a JWT, or None if it cannot be decoded."""
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.error(f"Problem decoding JWT payload: {str(e)}")
        return None


async def verify_token(session: "SessionContext", token: str) -> dict[str, Any]:
    """
    Verify a token against the tenant's JSON Web Key Set.

    The key set is fetched from ``tenants/<tenantId>/jwks/<mode>`` and the
    signing key is selected by the token's ``kid`` header.

    Returns:
        The verified claims

    Raises:
        InvalidTokenError: On any failure (missing kid, unknown key,
            bad signature, expired token, key set unavailable)
    """
    if not token:
        raise InvalidTokenError("Missing token")

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise InvalidTokenError("Token header could not be decoded") from e

    kid = header.get("kid")
    if not kid:
        raise InvalidTokenError("Token kid not defined")

    try:
        jwks = await session.api.get(
            f"tenants/{session.tenant_id}/jwks/{session.mode.value}",
            headers={"origin": session.location.origin},
        )
    except ServerError as e:
        raise InvalidTokenError(f"Problem fetching signing keys: {e.message}") from e

    keys = jwks.get("keys", []) if isinstance(jwks, dict) else []
    key = next((k for k in keys if k.get("kid") == kid), None)
    if key is None:
        raise InvalidTokenError("Public key not found")

    algorithm = key.get("alg") or header.get("alg") or "RS256"
    # Expiry is checked against the session clock, not jose's wall clock
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=[algorithm],
            options={"verify_aud": False, "verify_exp": False},
        )
    except JWTError as e:
        raise InvalidTokenError("Token verification failed") from e

    exp = claims.get("exp")
    if exp is not None:
        try:
            expired = float(exp) <= session.clock()
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Token exp claim is invalid") from e
        if expired:
            raise InvalidTokenError("Token expired")
    return claims
