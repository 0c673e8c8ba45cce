from linksaver.models.base import Base
from linksaver.models.bookmark import Bookmark
from linksaver.models.user import User

__all__ = ["Base", "Bookmark", "User"]
