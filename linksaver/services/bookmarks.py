"""Service layer for bookmark operations."""
import logging
from collections.abc import Sequence
from typing import Annotated, Optional
from urllib.parse import urlsplit
from uuid import UUID

from pydantic import AnyUrl, TypeAdapter, UrlConstraints
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linksaver.models import Bookmark
from linksaver.services.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from linksaver.services.metadata import MetadataService
from linksaver.services.summary import SummaryService
from linksaver.services.text import DEFAULT_MAX_WORDS, trim_to_words

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available"

# No max_length, unlike HttpUrl
_http_url = TypeAdapter(
    Annotated[
        AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)
    ]
)


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already starts with an http(s) scheme."""
    if not url.startswith(("http://", "https://")):
        return "https://" + url
    return url


def is_valid_url(url: str) -> bool:
    try:
        _http_url.validate_python(url)
    except PydanticValidationError:
        return False
    return True


def favicon_url(url: str, template: str) -> Optional[str]:
    hostname = urlsplit(url).hostname
    if not hostname:
        return None
    return template.format(domain=hostname)


async def find_bookmark_by_url(
    db: AsyncSession, user_id: UUID, url: str
) -> Optional[Bookmark]:
    result = await db.execute(
        select(Bookmark).where(Bookmark.user_id == user_id, Bookmark.url == url)
    )
    return result.scalar_one_or_none()


async def list_bookmarks(db: AsyncSession, user_id: UUID) -> Sequence[Bookmark]:
    """All bookmarks for a user, newest first."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
    )
    return result.scalars().all()


async def create_bookmark(
    db: AsyncSession,
    user_id: UUID,
    raw_url: Optional[str],
    metadata_service: MetadataService,
    summary_service: Optional[SummaryService] = None,
    max_words: int = DEFAULT_MAX_WORDS,
    favicon_template: Optional[str] = None,
) -> Bookmark:
    """
    Create a bookmark for ``raw_url`` with a scraped title and description.

    Flow:
    1. Reject a missing URL, normalize the scheme, reject unparseable URLs
    2. Reject a URL the user has already saved
    3. Extract title/description from the page (best effort)
    4. Prefer the summary service's text over the native description
    5. Persist, falling back to the URL as title

    Raises:
        ValidationError: If the URL is missing or invalid.
        ConflictError: If the user already has a bookmark for the URL.
        InternalError: If anything unexpected fails while scraping or saving.
    """
    raw_url = (raw_url or "").strip()
    if not raw_url:
        raise ValidationError("Please provide a URL")

    url = normalize_url(raw_url)
    if not is_valid_url(url):
        raise ValidationError("Please provide a valid URL")

    if await find_bookmark_by_url(db, user_id, url) is not None:
        raise ConflictError("Bookmark already exists")

    try:
        logger.info("Extracting metadata for %s", url)
        metadata = await metadata_service.extract(url)

        description = (
            trim_to_words(metadata.description, max_words)
            if metadata.description
            else NO_DESCRIPTION
        )
        if summary_service is not None:
            description = await summary_service.enrich(url, description)

        bookmark = Bookmark(
            user_id=user_id,
            url=url,
            title=metadata.title or url,
            description=description,
            favicon=favicon_url(url, favicon_template) if favicon_template else None,
        )
        db.add(bookmark)
        try:
            await db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent request for the same URL
            await db.rollback()
            raise ConflictError("Bookmark already exists") from exc
        await db.refresh(bookmark)
    except ServiceError:
        raise
    except Exception as exc:
        logger.exception("Error creating bookmark for %s", url)
        raise InternalError(str(exc) or "Failed to create bookmark") from exc

    logger.info("Created bookmark %s for user %s", bookmark.id, user_id)
    return bookmark


async def delete_bookmark(db: AsyncSession, user_id: UUID, bookmark_id: str) -> None:
    """
    Delete one of the user's bookmarks.

    Raises:
        NotFoundError: If no bookmark has this id.
        AuthError: If the bookmark belongs to someone else.
    """
    try:
        key = UUID(bookmark_id)
    except ValueError:
        raise NotFoundError("Bookmark not found") from None

    bookmark = await db.get(Bookmark, key)
    if bookmark is None:
        raise NotFoundError("Bookmark not found")

    if bookmark.user_id != user_id:
        raise AuthError("Not authorized to delete this bookmark")

    await db.delete(bookmark)
    await db.commit()
