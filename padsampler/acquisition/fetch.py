"""
Byte fetchers.

A fetcher downloads one resource and reports ``(received, total)`` after
every chunk; ``total`` is None when the server does not declare a length.
Failures are raised as TransferError.
"""

from __future__ import annotations
from typing import Callable, Optional, Protocol
import logging

import httpx

from .errors import TransferError

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[int, Optional[int]], None]


class ByteFetcher(Protocol):
    async def fetch(self, url: str, on_chunk: Optional[ChunkCallback] = None) -> bytes:
        ...


class HttpByteFetcher:
    """
    Streams a GET response with httpx, one suspension point per chunk.

    Pass ``client`` to share a connection pool (or a MockTransport in tests);
    otherwise a client is created on first use and closed by ``aclose()``.
    """

    def __init__(self, client: httpx.AsyncClient = None, timeout: float = 30.0,
                 chunk_size: int = 64 * 1024):
        self._client = client
        self._owns_client = client is None
        self.timeout = timeout
        self.chunk_size = chunk_size

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def fetch(self, url: str, on_chunk: Optional[ChunkCallback] = None) -> bytes:
        client = self._get_client()
        try:
            async with client.stream("GET", url) as response:
                if response.status_code >= 400:
                    raise TransferError(
                        f"HTTP {response.status_code} for {url}",
                        locator=url,
                        status_code=response.status_code,
                    )

                total = _declared_length(response)
                received = 0
                chunks = []
                async for chunk in response.aiter_bytes(self.chunk_size):
                    chunks.append(chunk)
                    received += len(chunk)
                    if on_chunk is not None:
                        on_chunk(received, total)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransferError(f"{type(e).__name__}: {e}", locator=url) from e

        logger.debug("Fetched %s (%d bytes)", url, received)
        return b"".join(chunks)

    async def aclose(self):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpByteFetcher:
        return self

    async def __aexit__(self, *exc):
        await self.aclose()


def _declared_length(response: httpx.Response) -> Optional[int]:
    # Content-Length describes the encoded body; ignore it when the body is compressed
    if response.headers.get("content-encoding"):
        return None
    raw = response.headers.get("content-length")
    if raw and raw.isdigit() and int(raw) > 0:
        return int(raw)
    return None
