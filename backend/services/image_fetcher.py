# backend/services/image_fetcher.py
"""
Remote image -> bytes, for embedding into generated PDFs.

- http / https only; malformed URL fails before any network call
- redirects (3xx + Location) are followed manually, capped at max_redirects hops
- bounded timeout on every hop
- failures: InvalidUrlError / TooManyRedirectsError / UpstreamFetchError
"""
from __future__ import annotations

import asyncio
import logging
from urllib.parse import urljoin, urlparse

import requests

from core.config import settings
from core.errors import InvalidUrlError, TooManyRedirectsError, UpstreamFetchError

logger = logging.getLogger(__name__)


class ImageFetcher:
    def __init__(
        self,
        user_agent: str = settings.FETCH_USER_AGENT,
        timeout: float = settings.FETCH_TIMEOUT_SECONDS,
        max_redirects: int = settings.FETCH_MAX_REDIRECTS,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_redirects = max_redirects

    # ────────────── public ──────────────
    def fetch(self, url: str) -> bytes:
        return self._fetch(url, hops=0)

    async def fetch_async(self, url: str) -> bytes:
        """在 worker thread 執行，不阻塞 event loop"""
        return await asyncio.to_thread(self.fetch, url)

    # ────────────── internals ──────────────
    @staticmethod
    def _validate(url: str) -> None:
        try:
            parsed = urlparse(url)
        except ValueError:
            raise InvalidUrlError(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidUrlError(url)

    def _fetch(self, url: str, hops: int) -> bytes:
        self._validate(url)

        try:
            resp = requests.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamFetchError(
                f"Failed to fetch image from {url}: {e}", url=url, cause=e
            ) from e

        try:
            location = resp.headers.get("location")
            if 300 <= resp.status_code < 400 and location:
                if hops >= self.max_redirects:
                    raise TooManyRedirectsError(url, hops)
                next_url = urljoin(url, location)
                logger.debug("Redirect %s -> %s (hop %d)", url, next_url, hops + 1)
                return self._fetch(next_url, hops + 1)

            if resp.status_code < 200 or resp.status_code >= 300:
                raise UpstreamFetchError(
                    f"Failed to fetch image from {url}, status code: {resp.status_code}",
                    url=url,
                    upstream_status=resp.status_code,
                )
            return resp.content
        finally:
            resp.close()


image_fetcher = ImageFetcher()
