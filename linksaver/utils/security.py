"""Password hashing and access-token helpers."""
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from linksaver.config import Settings

PASSWORD_ALGORITHM = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 390_000


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), iterations
    ).hex()


def hash_password(password: str) -> str:
    """Hash a password as ``algorithm$iterations$salt$digest``."""
    salt = secrets.token_hex(16)
    digest = _derive(password, salt, PASSWORD_ITERATIONS)
    return f"{PASSWORD_ALGORITHM}${PASSWORD_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, digest = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != PASSWORD_ALGORITHM:
        return False
    return hmac.compare_digest(_derive(password, salt, int(iterations)), digest)


def create_access_token(user_id: UUID, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> UUID:
    """
    Validate a token and return the user id it was issued for.

    Raises:
        jwt.PyJWTError: If the token is malformed, expired or badly signed.
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
    try:
        return UUID(payload["sub"])
    except (AttributeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Invalid subject claim") from exc
