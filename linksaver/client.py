"""
Async HTTP client for the Link Saver API.

Every authenticated call takes the bearer token as an argument; nothing about
the caller's session is stored on the client or at module level.
"""
import os
from typing import Any, Optional

import httpx

from linksaver.schemas import BookmarkRead, TokenResponse, UserRead


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("LINKSAVER_API_URL", "http://localhost:8000")


def _get_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def error_message(exc: httpx.HTTPStatusError) -> str:
    """Pull the API's ``{"message": ...}`` text out of an error response."""
    try:
        body = exc.response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"HTTP {exc.response.status_code}"


def create_client(
    base_url: Optional[str] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url or get_api_base_url(),
        timeout=timeout,
        headers={"Content-Type": "application/json"},
        transport=transport,
    )


async def _request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    token: Optional[str] = None,
    json: Optional[dict[str, Any]] = None,
) -> Any:
    response = await client.request(
        method,
        path,
        json=json,
        headers=_get_headers(token) if token else None,
    )
    response.raise_for_status()
    return response.json()


async def signup(client: httpx.AsyncClient, email: str, password: str) -> TokenResponse:
    data = await _request(
        client, "POST", "/api/auth/signup", json={"email": email, "password": password}
    )
    return TokenResponse.model_validate(data)


async def login(client: httpx.AsyncClient, email: str, password: str) -> TokenResponse:
    data = await _request(
        client, "POST", "/api/auth/login", json={"email": email, "password": password}
    )
    return TokenResponse.model_validate(data)


async def get_me(client: httpx.AsyncClient, token: str) -> UserRead:
    return UserRead.model_validate(await _request(client, "GET", "/api/auth/me", token))


async def list_bookmarks(client: httpx.AsyncClient, token: str) -> list[BookmarkRead]:
    data = await _request(client, "GET", "/api/bookmarks", token)
    return [BookmarkRead.model_validate(item) for item in data]


async def add_bookmark(client: httpx.AsyncClient, token: str, url: str) -> BookmarkRead:
    data = await _request(client, "POST", "/api/bookmarks", token, json={"url": url})
    return BookmarkRead.model_validate(data)


async def delete_bookmark(client: httpx.AsyncClient, token: str, bookmark_id: str) -> str:
    data = await _request(client, "DELETE", f"/api/bookmarks/{bookmark_id}", token)
    return data["message"]
