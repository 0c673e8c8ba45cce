from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BookmarkCreate(BaseModel):
    # Presence and URL validity are checked in services.bookmarks
    url: Optional[str] = None


class BookmarkRead(BaseModel):
    id: UUID
    user_id: UUID
    url: str
    title: str
    description: str
    favicon: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
