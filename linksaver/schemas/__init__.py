from linksaver.schemas.bookmark import BookmarkCreate, BookmarkRead, MessageResponse
from linksaver.schemas.user import TokenResponse, UserCreate, UserLogin, UserRead

__all__ = [
    "BookmarkCreate",
    "BookmarkRead",
    "MessageResponse",
    "TokenResponse",
    "UserCreate",
    "UserLogin",
    "UserRead",
]
