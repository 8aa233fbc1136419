"""
Client for the free translate API used by /translate.
"""

import logging
from dataclasses import dataclass, field
from html import escape

import httpx

from src.config import settings

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """Translate API call failed."""


@dataclass
class Translation:
    source_language: str
    source_text: str
    destination_language: str
    destination_text: str
    audio_url: str | None = None
    alternatives: list[str] = field(default_factory=list)

    def format_html(self) -> str:
        """Reply text for the chat."""
        lines = [
            f"<b>Original ({self.source_language}):</b> <code>{escape(self.source_text.strip())}</code>",
            f"<b>Translation ({self.destination_language}):</b> <code>{escape(self.destination_text)}</code>",
        ]
        if self.audio_url:
            lines.append(f'<a href="{self.audio_url}">Audio</a>')
        if self.alternatives:
            lines.append("")
            lines.append(
                "<b>Possible translations:</b> " + ", ".join(escape(str(a)) for a in self.alternatives)
            )
        return "\n".join(lines)


async def translate(
    text: str,
    destination: str = "en",
    client: httpx.AsyncClient | None = None,
) -> Translation:
    """
    Translate text; the source language is detected by the API.

    Raises:
        TranslationError: On network errors or unexpected responses
    """
    own_client = client is None
    client = client or httpx.AsyncClient(timeout=settings.http_timeout)

    try:
        response = await client.get(
            f"{settings.translate_api_url.rstrip('/')}/translate",
            params={"dl": destination, "text": text},
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise TranslationError(str(e)) from e
    finally:
        if own_client:
            await client.aclose()

    try:
        return Translation(
            source_language=data["source-language"],
            source_text=data["source-text"],
            destination_language=data["destination-language"],
            destination_text=data["destination-text"],
            audio_url=(data.get("pronunciation") or {}).get("destination-text-audio"),
            alternatives=(data.get("translations") or {}).get("possible-translations") or [],
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise TranslationError(f"Unexpected translate response: {data}") from e
