"""
Credential checks and access tokens.
Passwords are stored as salted bcrypt hashes; sessions are HS256 JWTs carrying
the public user identity {id, username, role}.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from repositories import users
from schemas.auth import UserPublic
from services.errors import ConflictError, ForbiddenError, InternalError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

MSG_CREDENTIALS_REQUIRED = "Username and password are required"
MSG_INVALID_CREDENTIALS = "Invalid username or password"
MSG_INVALID_TOKEN = "Invalid or expired token"

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

_dummy_hash: Optional[bytes] = None


def hash_password(password: str) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    except ValueError as e:
        logger.error("Error hashing password: %s", e)
        raise InternalError("Error processing password") from e
    return hashed.decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    except ValueError:
        return False


def _burn_password_check(password: str) -> None:
    """Spend a bcrypt comparison for unknown usernames so timing matches a real miss."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    try:
        bcrypt.checkpw(password.encode("utf-8"), _dummy_hash)
    except ValueError:
        pass


def create_access_token(user: UserPublic, expires_minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    payload = {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: Optional[str]) -> UserPublic:
    """Missing token -> 401; bad signature, malformed or expired token -> 403."""
    if not token:
        raise UnauthorizedError("Authentication token required")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise ForbiddenError(MSG_INVALID_TOKEN) from e
    except jwt.InvalidTokenError as e:
        raise ForbiddenError(MSG_INVALID_TOKEN) from e
    try:
        return UserPublic.model_validate(payload)
    except PydanticValidationError as e:
        raise ForbiddenError(MSG_INVALID_TOKEN) from e


def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
    if not username or not username.strip() or not password:
        raise ValidationError(MSG_CREDENTIALS_REQUIRED)


async def signup(session: AsyncSession, username: Optional[str], password: Optional[str]) -> int:
    _require_credentials(username, password)
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    if await users.get_by_username(session, username) is not None:
        raise ConflictError("Username already exists")
    password_hash = hash_password(password)
    try:
        user = await users.create_user(session, username, password_hash)
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same name
        await session.rollback()
        raise ConflictError("Username already exists") from e
    logger.info("Registered user %s (id=%s)", username, user.id)
    return user.id


async def login(session: AsyncSession, username: Optional[str], password: Optional[str]) -> tuple[str, UserPublic]:
    _require_credentials(username, password)
    user = await users.get_by_username(session, username)
    if user is None:
        _burn_password_check(password)
        raise UnauthorizedError(MSG_INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise UnauthorizedError(MSG_INVALID_CREDENTIALS)
    public = UserPublic(id=user.id, username=user.username, role=user.role)
    return create_access_token(public), public
