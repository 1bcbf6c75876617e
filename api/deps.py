from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings
from schemas.auth import UserPublic
from services.auth import verify_token
from services.errors import ForbiddenError, UnauthorizedError
from services.storage import DocumentStorage

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserPublic:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication token required")
    return verify_token(credentials.credentials)


async def require_admin(user: UserPublic = Depends(get_current_user)) -> UserPublic:
    if user.role != "admin":
        raise ForbiddenError("Admin access required")
    return user


def get_document_storage() -> DocumentStorage:
    return DocumentStorage(settings.upload_dir)
