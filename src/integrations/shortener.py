"""
Link shortener client with a per-alias memo.
Never fails: on any downstream problem the original URL is returned.
"""

import asyncio
import logging

import httpx

from src.config import settings

logger = logging.getLogger(__name__)

MAX_ALIAS_LENGTH = 30


class LinkShortener:
    """Shortens delivery links through an adrinolinks-style API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.shortener_api_key
        self.base_url = (base_url or settings.shortener_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._client = client
        # alias hint -> short URL; lives as long as the process
        self._cache: dict[str, str] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def shorten(self, long_url: str, alias_hint: str) -> str:
        """
        Return a short URL for `long_url`, or `long_url` itself on failure.

        Args:
            long_url: URL to shorten
            alias_hint: Preferred alias; also the cache key

        Returns:
            Shortened URL or the original URL
        """
        cached = self._cache.get(alias_hint)
        if cached:
            return cached

        if not self.api_key:
            return long_url

        # Callers waiting on the same alias reuse the first result
        async with self._locks.setdefault(alias_hint, asyncio.Lock()):
            cached = self._cache.get(alias_hint)
            if cached:
                return cached
            return await self._request(long_url, alias_hint)

    async def _request(self, long_url: str, alias_hint: str) -> str:
        alias = alias_hint[:MAX_ALIAS_LENGTH]

        try:
            response = await self._get_client().get(
                f"{self.base_url}/api",
                params={"api": self.api_key, "url": long_url, "alias": alias},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Shortener failed for alias '{alias}': {e}")
            return long_url

        if not isinstance(data, dict) or data.get("status") != "success" or not data.get("shortenedUrl"):
            logger.warning(f"Shortener rejected alias '{alias}': {data}")
            return long_url

        short_url = data["shortenedUrl"]
        self._cache[alias_hint] = short_url
        return short_url

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Global shortener instance
link_shortener = LinkShortener()
