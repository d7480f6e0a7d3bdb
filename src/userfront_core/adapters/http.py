"""
HTTP wrapper for the authentication API.

Uses httpx for asynchronous communication. Every non-2xx response is
reformatted into a ServerError carrying the server's message verbatim.
"""

import logging
import re
from typing import Any, Optional, TYPE_CHECKING

import httpx

from userfront_core.domain.errors import ServerError

if TYPE_CHECKING:
    from userfront_core.context import SessionContext


logger = logging.getLogger("userfront_core.adapters.http")

_DUPLICATE_SLASHES = re.compile(r"([^:]/)/+")


def reduce_slashes(url: str) -> str:
    """Collapse repeated slashes, except the ones after the scheme."""
    return _DUPLICATE_SLASHES.sub(r"\1", url)


def format_error_response(response: httpx.Response) -> ServerError:
    """Build the single error shape exposed to callers from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = response.text
    message = None
    if isinstance(body, dict):
        message = body.get("message")
    if not message:
        message = f"Request failed with status code {response.status_code}"
    return ServerError(
        message,
        status_code=response.status_code,
        details={"body": body},
    )


class ApiClient:
    """
    GET/POST/PUT over the session's base URL.

    A new ``httpx.AsyncClient`` is opened per request. Pass ``transport``
    (e.g. ``httpx.MockTransport``) to route requests elsewhere.

    Usage:
        api = ApiClient(session)
        data = await api.post("auth/basic", {"tenantId": "abc", ...})
    """

    def __init__(
        self,
        session: "SessionContext",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._session = session
        self._transport = transport
        self._timeout = timeout

    def url_for(self, path: str) -> str:
        return reduce_slashes(f"{self._session.base_url}{path}")

    def default_headers(self) -> dict[str, str]:
        domain = self._session.domain
        if not domain:
            return {}
        url = f"https://{domain}"
        return {"x-application-id": url, "x-origin": url}

    async def get(
        self,
        path: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request("GET", path, headers=headers, params=params)

    async def post(
        self,
        path: str,
        payload: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request(
            "POST", path, payload=payload, headers=headers, params=params
        )

    async def put(
        self,
        path: str,
        payload: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request(
            "PUT", path, payload=payload, headers=headers, params=params
        )

    async def request(
        self,
        method: str,
        path: str,
        payload: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        url = self.url_for(path)
        merged_headers = {**self.default_headers(), **(headers or {})}

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout
        ) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    json=payload,
                    headers=merged_headers,
                    params=params or None,
                )
            except httpx.HTTPError as e:
                logger.error(f"{method} {url} failed: {str(e)}")
                raise ServerError(str(e) or "Problem with request") from e

        if not response.is_success:
            error = format_error_response(response)
            logger.debug(f"{method} {url} -> {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}
