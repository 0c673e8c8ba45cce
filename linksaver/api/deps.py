from typing import Annotated, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from linksaver.config import Settings, get_settings
from linksaver.database import get_db
from linksaver.models.user import User
from linksaver.services.exceptions import AuthError
from linksaver.services.metadata import MetadataService
from linksaver.services.summary import SummaryService
from linksaver.utils.security import decode_access_token

security = HTTPBearer(auto_error=False)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def get_session(session: AsyncSession = Depends(get_db)) -> AsyncSession:
    return session


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Resolve the user from this request's ``Authorization: Bearer`` token."""
    if credentials is None:
        raise AuthError("Not authorized, no token", headers=BEARER_CHALLENGE)

    try:
        user_id = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise AuthError(
            "Not authorized, token failed", headers=BEARER_CHALLENGE
        ) from None

    user = await db.get(User, user_id)
    if user is None:
        raise AuthError("Not authorized, user not found", headers=BEARER_CHALLENGE)
    return user


def get_metadata_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> MetadataService:
    return MetadataService(timeout=settings.fetch_timeout)


def get_summary_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> Optional[SummaryService]:
    if not settings.summary_enabled:
        return None
    return SummaryService(
        str(settings.summary_service_url),
        timeout=settings.fetch_timeout,
        max_words=settings.description_max_words,
    )
