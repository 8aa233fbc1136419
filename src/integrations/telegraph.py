"""
Telegraph publisher - renders long search results as a hosted page.
"""

import json
import logging

import httpx

from src.config import settings
from src.core.catalog.links import delivery_link
from src.core.catalog.models import SearchResult
from src.integrations.shortener import LinkShortener, link_shortener

logger = logging.getLogger(__name__)


class PublishUnavailable(Exception):
    """Could not obtain a Telegraph access token."""


class PublishFailed(Exception):
    """Telegraph refused or failed to create the page."""


def default_instructions() -> list[dict]:
    """Static footer shown under every results page."""
    return [
        {
            "tag": "p",
            "children": [
                "📺 How to open a link: press it, then press START in the bot that opens.",
            ],
        },
        {"tag": "p", "children": ["📚 More from us:"]},
        {
            "tag": "ul",
            "children": [
                {
                    "tag": "li",
                    "children": [
                        {
                            "tag": "a",
                            "attrs": {"href": f"https://t.me/{settings.delivery_bot_username}"},
                            "children": [f"@{settings.delivery_bot_username}"],
                        },
                        " - Study materials",
                    ],
                },
                {
                    "tag": "li",
                    "children": [
                        {
                            "tag": "a",
                            "attrs": {"href": f"https://t.me/{settings.bot_username}"},
                            "children": [f"@{settings.bot_username}"],
                        },
                        " - Search and buy",
                    ],
                },
            ],
        },
    ]


class TelegraphPublisher:
    """Publishes result lists to telegra.ph."""

    def __init__(
        self,
        shortener: LinkShortener | None = None,
        api_url: str | None = None,
        short_name: str | None = None,
        author_name: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.shortener = shortener or link_shortener
        self.api_url = (api_url or settings.telegraph_api_url).rstrip("/")
        self.short_name = short_name or settings.telegraph_short_name
        self.author_name = author_name or settings.telegraph_author_name
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._client = client
        self._access_token: str | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def _get_access_token(self) -> str:
        """Create the Telegraph account on first use and reuse its token."""
        if self._access_token:
            return self._access_token

        try:
            response = await self._get_client().post(
                f"{self.api_url}/createAccount",
                data={"short_name": self.short_name, "author_name": self.author_name},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PublishUnavailable(f"Telegraph account request failed: {e}") from e

        if not isinstance(data, dict) or not data.get("ok"):
            raise PublishUnavailable(f"Telegraph account rejected: {data}")

        try:
            self._access_token = data["result"]["access_token"]
        except (KeyError, TypeError) as e:
            raise PublishUnavailable(f"Unexpected createAccount response: {data}") from e
        logger.info("Telegraph account created")
        return self._access_token

    async def build_content(self, query: str, results: list[SearchResult]) -> list[dict]:
        """Telegraph node list for the page."""
        entries = []
        for result in results:
            link = await self.shortener.shorten(delivery_link(result.item.key), result.item.key)
            entries.append({
                "tag": "li",
                "children": [
                    {"tag": "a", "attrs": {"href": link}, "children": [result.item.label]},
                    f" ({result.category_title})",
                ],
            })

        return [
            {"tag": "h3", "children": [f'Results for: "{query}"']},
            {"tag": "p", "children": [f"Found {len(results)} study materials:"]},
            {"tag": "ul", "children": entries},
            {"tag": "hr"},
            {"tag": "h4", "children": ["ℹ️ Resources & Instructions"]},
            *default_instructions(),
            {"tag": "p", "children": [f"Generated by {self.author_name}"]},
        ]

    async def publish(self, query: str, results: list[SearchResult]) -> str:
        """
        Publish the results page.

        Returns:
            Public URL of the page

        Raises:
            PublishUnavailable: No access token could be obtained
            PublishFailed: Page creation failed
        """
        token = await self._get_access_token()
        content = await self.build_content(query, results)

        try:
            response = await self._get_client().post(
                f"{self.api_url}/createPage",
                data={
                    "access_token": token,
                    "title": f"Study Material: {query[:50]}",
                    "author_name": self.author_name,
                    "content": json.dumps(content, ensure_ascii=False),
                    "return_content": "false",
                },
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PublishFailed(f"Telegraph page request failed: {e}") from e

        if not isinstance(data, dict) or not data.get("ok"):
            raise PublishFailed(f"Telegraph page rejected: {data}")

        try:
            result = data["result"]
            return result.get("url") or f"https://telegra.ph/{result['path']}"
        except (KeyError, TypeError, AttributeError) as e:
            raise PublishFailed(f"Unexpected createPage response: {data}") from e

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Global publisher instance
telegraph_publisher = TelegraphPublisher()
