"""Replace a page's native description with a reader-service summary."""
import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx

from linksaver.services.text import DEFAULT_MAX_WORDS, trim_to_words

logger = logging.getLogger(__name__)

# Header lines the reader service prepends to its output.
HEADER_LINE_PATTERN = re.compile(
    r"^(?:Title|URL Source|Markdown Content):.*(?:\n|$)", re.MULTILINE
)
MARKDOWN_PREFIX_PATTERN = re.compile(r"\AMarkdown Content: ?\n?")
EDGE_DASHES_PATTERN = re.compile(r"\A[\s-]+|[\s-]+\Z")
EXTRA_NEWLINES_PATTERN = re.compile(r"\n{3,}")

# Left unescaped in addition to letters, digits and -_.~
URI_COMPONENT_SAFE = "!*'()"


def clean_summary(text: str) -> str:
    """Strip reader-service boilerplate and normalize blank lines."""
    text = HEADER_LINE_PATTERN.sub("", text)
    text = MARKDOWN_PREFIX_PATTERN.sub("", text)
    text = EDGE_DASHES_PATTERN.sub("", text)
    text = EXTRA_NEWLINES_PATTERN.sub("\n\n", text)
    return text.strip()


class SummaryService:
    """Client for a reader/summary proxy keyed by the percent-encoded URL."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        max_words: int = DEFAULT_MAX_WORDS,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.max_words = max_words

    def build_url(self, url: str) -> str:
        return self.base_url + quote(url, safe=URI_COMPONENT_SAFE)

    async def fetch_summary(self, url: str) -> Optional[str]:
        """Return the raw summary text, or None if the service did not answer with 2xx."""
        async with httpx.AsyncClient(
            follow_redirects=True, timeout=self.timeout
        ) as client:
            response = await client.get(self.build_url(url))
        if not response.is_success:
            logger.warning(
                "Summary service returned %s for %s", response.status_code, url
            )
            return None
        return response.text

    async def enrich(self, url: str, fallback_description: str) -> str:
        """
        Return a cleaned, trimmed summary for ``url``.

        Any failure (network error, non-2xx status, nothing left after
        cleanup) falls back to ``fallback_description`` unchanged.
        """
        try:
            summary = await self.fetch_summary(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Failed to fetch summary for %s: %s", url, exc)
            return fallback_description

        if not summary:
            return fallback_description

        cleaned = clean_summary(summary)
        if not cleaned:
            return fallback_description

        logger.debug("Summary fetched and cleaned for %s", url)
        return trim_to_words(cleaned, self.max_words)
