"""
HTTP transport for the storefront REST API.

Wraps a lazily created httpx.AsyncClient, attaches bearer credentials and
turns error responses into storefront exceptions.
"""
import logging
from typing import Any

import httpx

from storefront.config import Settings, get_settings
from storefront.errors import (
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_UNAUTHORIZED,
    ERROR_UNEXPECTED,
    ApiError,
    AuthExpiredError,
    NotFoundError,
    PermissionDeniedError,
)
from storefront.logging import sanitize_string_for_logging

logger = logging.getLogger(__name__)


def extract_error_message(response: httpx.Response, default: str = ERROR_UNEXPECTED) -> str:
    """
    Pull a readable message out of an error body.

    The API answers with {"message": "..."} or, for validation failures,
    {"message": ["field a ...", "field b ..."]}.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or default

    if not isinstance(data, dict):
        return default
    message = data.get("message")
    if isinstance(message, list):
        return ", ".join(str(m) for m in message) or default
    if message:
        return str(message)
    return default


class ApiClient:
    """Async client for the storefront API."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.settings.api_url,
                timeout=httpx.Timeout(self.settings.http_timeout),
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
        not_found: str = ERROR_NOT_FOUND,
    ) -> httpx.Response:
        """
        Send a request and return the response for any 2xx status.

        `not_found` is the NotFoundError message used when a 404 body
        carries none of its own.

        Raises:
            AuthExpiredError: 401
            PermissionDeniedError: 403
            NotFoundError: 404
            ApiError: any other non-2xx status, or a transport failure
        """
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        client = await self._get_http_client()
        try:
            response = await client.request(method, path, headers=headers, json=json, params=params)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{ERROR_NETWORK}: {e!s}") from e

        if response.is_success:
            return response

        status = response.status_code
        if status == 401:
            raise AuthExpiredError(extract_error_message(response, ERROR_UNAUTHORIZED))
        if status == 403:
            raise PermissionDeniedError(extract_error_message(response, ERROR_UNAUTHORIZED))
        if status == 404:
            raise NotFoundError(extract_error_message(response, not_found))

        message = extract_error_message(response)
        logger.error(
            "%s %s returned %s: %s",
            method,
            path,
            status,
            sanitize_string_for_logging(message, max_length=200),
        )
        raise ApiError(message, status_code=status)

    async def get(
        self,
        path: str,
        *,
        token: str | None = None,
        params: dict[str, Any] | None = None,
        not_found: str = ERROR_NOT_FOUND,
    ) -> httpx.Response:
        return await self.request("GET", path, token=token, params=params, not_found=not_found)

    async def post(self, path: str, *, token: str | None = None, json: Any = None) -> httpx.Response:
        return await self.request("POST", path, token=token, json=json)

    async def put(
        self,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        not_found: str = ERROR_NOT_FOUND,
    ) -> httpx.Response:
        return await self.request("PUT", path, token=token, json=json, not_found=not_found)

    async def delete(
        self, path: str, *, token: str | None = None, not_found: str = ERROR_NOT_FOUND
    ) -> httpx.Response:
        return await self.request("DELETE", path, token=token, not_found=not_found)
