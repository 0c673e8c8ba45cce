from fastapi import APIRouter

from linksaver.api.v1 import auth, bookmarks

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(bookmarks.router)

__all__ = ["api_router"]
