from typing import Literal, Optional

from pydantic import BaseModel


class SignupRequest(BaseModel):
    # Optional so missing fields reach the service and surface as a 400
    username: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """Identity carried inside the access token and returned at login."""
    id: int
    username: str
    role: Literal["user", "admin"] = "user"
