"""Blob store backed by a ledger gateway over HTTP.

The gateway exposes the contract's storage primitives:

    GET  {base_url}/data/{key}   -> getData(key), raw bytes (404 or empty body = absent)
    PUT  {base_url}/data/{key}   -> setData(key, bytes), JSON transaction result
    GET  {base_url}/available    -> isAvailable(), JSON {"available": bool}

Writes are signed by the gateway's wallet. A signer that declines answers
with EIP-1193 code 4001 (or a "user rejected" message), which is surfaced as
UserRejectedError. Everything else that is not a 2xx, including timeouts,
becomes RemoteUnavailableError.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import quote

import httpx

from theater_ledger.exceptions import RemoteUnavailableError, UserRejectedError
from theater_ledger.logging import get_ledger_logger

logger = get_ledger_logger(__name__)

USER_REJECTED_CODE = 4001


def _is_user_rejection(response: httpx.Response) -> bool:
    try:
        payload: Any = response.json()
    except ValueError:
        return "user rejected" in response.text.lower()
    if not isinstance(payload, dict):
        return False
    if payload.get("code") == USER_REJECTED_CODE:
        return True
    message = str(payload.get("error") or payload.get("message") or "")
    return "user rejected" in message.lower()


class HttpBlobStore:
    """BlobStore implementation talking to a ledger gateway.

    Args:
        base_url: Gateway root URL.
        api_key: Optional bearer token.
        timeout: Per-request timeout in seconds.
        client: Optional pre-configured client (tests inject one with a MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
            yield client

    def _data_url(self, key: str) -> str:
        return f"{self._base_url}/data/{quote(key, safe='')}"

    async def read(self, key: str) -> bytes:
        """getData(key). Absent keys return b""."""
        try:
            async with self._session() as client:
                response = await client.get(self._data_url(key), headers=self._headers)
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(f"getData({key!r}) failed: {e}") from e
        if response.status_code == httpx.codes.NOT_FOUND:
            return b""
        if response.is_error:
            raise RemoteUnavailableError(f"getData({key!r}) failed with HTTP {response.status_code}")
        return response.content

    async def write(self, key: str, data: bytes) -> None:
        """setData(key, data). Returns after the transaction is acknowledged."""
        try:
            async with self._session() as client:
                response = await client.put(
                    self._data_url(key),
                    content=data,
                    headers={**self._headers, "Content-Type": "application/octet-stream"},
                )
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(f"setData({key!r}) failed: {e}") from e
        if response.is_error:
            if _is_user_rejection(response):
                raise UserRejectedError("user rejected transaction")
            raise RemoteUnavailableError(f"setData({key!r}) failed with HTTP {response.status_code}")
        logger.debug(f"setData({key!r}) acknowledged: {response.text[:200]}")

    async def check_available(self) -> bool:
        """isAvailable(). Transport failures count as unavailable."""
        try:
            async with self._session() as client:
                response = await client.get(f"{self._base_url}/available", headers=self._headers)
        except httpx.HTTPError as e:
            logger.warning(f"isAvailable() failed: {e}")
            return False
        if response.is_error:
            return False
        try:
            payload = response.json()
        except ValueError:
            return False
        return isinstance(payload, dict) and payload.get("available") is True
