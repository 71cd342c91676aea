"""HTTP adapter for listing pages and the OSF files API."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class HTTPAPIClient:
    """
    Async HTTP client adapter.

    Implements IHTTPClient protocol. GET requests are retried on transport
    errors and 5xx responses; PUT is sent once and its status left to the caller.
    """

    def __init__(
        self,
        timeout: float = 60,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("HTTPAPIClient not initialized. Use 'async with' context.")
        return self._client

    async def get(self, url: str) -> httpx.Response:
        client = self._require_client()
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                response = await client.get(url)

                if response.status_code >= 500 and attempt < self._max_retries - 1:
                    logger.debug(
                        f"GET {url} returned {response.status_code}, retrying ({attempt + 1}/{self._max_retries})"
                    )
                    await asyncio.sleep(self._retry_delay * (attempt + 1))
                    continue

                return response
            except httpx.RequestError as exc:
                last_exception = exc
                if attempt < self._max_retries - 1:
                    logger.debug(f"GET {url} failed: {exc!r}, retrying")
                    await asyncio.sleep(self._retry_delay * (attempt + 1))
                    continue
                raise

        if last_exception:
            raise last_exception
        raise RuntimeError(f"Failed to GET {url} after {self._max_retries} attempts")

    async def put(
        self,
        url: str,
        content: Any,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        client = self._require_client()
        return await client.put(url, content=content, params=params, headers=headers)
