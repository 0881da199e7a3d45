from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Optional

import aiohttp

from knot_downloader.errors import FetchError
from knot_downloader.logging import TRACE
from knot_downloader.sync.models import FetchResponse

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Issues conditional GET requests over a single shared aiohttp session."""

    def __init__(self, *, timeout: timedelta) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout.total_seconds())
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> HttpFetcher:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)

    async def stop(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def conditional_get(self, url: str, *, etag: Optional[str]) -> FetchResponse:
        """
        GET `url`, sending If-None-Match when an ETag is known.

        The body is only read for 2xx responses. Transport failures and timeouts
        raise FetchError, and so does any status other than 2xx or 304.
        """
        if self._session is None:
            raise RuntimeError("HttpFetcher.start() must be called before fetching")

        headers = {}
        if etag:
            headers["If-None-Match"] = etag

        logger.log(TRACE, "Requesting url=%s conditional=%s", url, bool(etag))
        try:
            async with self._session.get(url, headers=headers) as response:
                status = response.status
                if status == 304:
                    return FetchResponse(not_modified=True)
                if not 200 <= status < 300:
                    reason = f"{status} {response.reason}" if response.reason else str(status)
                    raise FetchError(url, reason)
                body = await response.text(errors="replace")
                return FetchResponse(
                    not_modified=False,
                    etag=response.headers.get("ETag"),
                    body=body,
                )
        except asyncio.TimeoutError as e:
            raise FetchError(url, "request timed out") from e
        except aiohttp.ClientError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e
