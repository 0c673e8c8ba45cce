"""Fetch a page and pull its title and description out of the raw HTML."""
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; LinkSaver/1.0)"

TITLE_PATTERN = re.compile(r"<title>(.*?)</title>", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(
    r'<meta name="description" content="(.*?)"', re.IGNORECASE
)


@dataclass
class ExtractedMetadata:
    """Title and description found on a page; either may be missing."""

    title: Optional[str] = None
    description: Optional[str] = None


def parse_metadata(html: str) -> ExtractedMetadata:
    """
    Extract the first ``<title>`` and ``<meta name="description">`` values.

    Matching is case-insensitive but otherwise strict: no entity decoding,
    no tolerance for reordered attributes, and captures do not span lines.
    """
    title_match = TITLE_PATTERN.search(html)
    description_match = DESCRIPTION_PATTERN.search(html)
    return ExtractedMetadata(
        title=title_match.group(1) if title_match else None,
        description=description_match.group(1) if description_match else None,
    )


class MetadataService:
    """Fetches a URL and extracts its metadata, best effort."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    async def fetch_html(self, url: str) -> str:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            response = await client.get(url)
            return response.text

    async def extract(self, url: str) -> ExtractedMetadata:
        """Return the page metadata, or an empty result if the fetch fails."""
        try:
            html = await self.fetch_html(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.warning("Error extracting metadata for %s: %s", url, exc)
            return ExtractedMetadata()
        return parse_metadata(html)
