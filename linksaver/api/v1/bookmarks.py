from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from linksaver.api.deps import (
    get_current_user,
    get_metadata_service,
    get_session,
    get_summary_service,
)
from linksaver.config import Settings, get_settings
from linksaver.models import User
from linksaver.schemas import BookmarkCreate, BookmarkRead, MessageResponse
from linksaver.services import bookmarks as bookmark_service
from linksaver.services.metadata import MetadataService
from linksaver.services.summary import SummaryService

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=list[BookmarkRead])
async def list_bookmarks(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> list[BookmarkRead]:
    """List all bookmarks for the current user, newest first."""
    bookmarks = await bookmark_service.list_bookmarks(db, current_user.id)
    return [BookmarkRead.model_validate(bookmark) for bookmark in bookmarks]


@router.post("", response_model=BookmarkRead, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    payload: BookmarkCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    metadata_service: Annotated[MetadataService, Depends(get_metadata_service)],
    summary_service: Annotated[Optional[SummaryService], Depends(get_summary_service)],
) -> BookmarkRead:
    """Save a URL, filling in its title and description from the page."""
    bookmark = await bookmark_service.create_bookmark(
        db,
        current_user.id,
        payload.url,
        metadata_service=metadata_service,
        summary_service=summary_service,
        max_words=settings.description_max_words,
        favicon_template=settings.favicon_service_url,
    )
    return BookmarkRead.model_validate(bookmark)


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(
    bookmark_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> MessageResponse:
    """Delete a bookmark (must belong to current user)."""
    await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)
    return MessageResponse(message="Bookmark removed")
