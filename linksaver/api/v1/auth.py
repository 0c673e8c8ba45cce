import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linksaver.api.deps import get_current_user, get_session
from linksaver.config import Settings, get_settings
from linksaver.models.user import User
from linksaver.schemas import TokenResponse, UserCreate, UserLogin, UserRead
from linksaver.services.exceptions import AuthError, ConflictError
from linksaver.utils.security import (
    create_access_token,
    hash_password,
    verify_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: User, settings: Settings) -> TokenResponse:
    return TokenResponse(
        token=create_access_token(user.id, settings),
        user=UserRead.model_validate(user),
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: UserCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Register a new user and return an access token."""
    email = payload.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise ConflictError("User already exists")

    # PBKDF2 is CPU-bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, payload.password)
    user = User(email=email, password_hash=password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    return _token_response(user, settings)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: UserLogin,
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Exchange email and password for an access token."""
    result = await db.execute(select(User).where(User.email == payload.email.lower()))
    user = result.scalar_one_or_none()
    if user is None or not await asyncio.to_thread(
        verify_password, payload.password, user.password_hash
    ):
        raise AuthError("Invalid email or password")

    return _token_response(user, settings)


@router.get("/me", response_model=UserRead)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    """Get the current authenticated user."""
    return UserRead.model_validate(current_user)
