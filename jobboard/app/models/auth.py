"""Auth request and response models."""
from typing import Optional
from datetime import datetime

from pydantic import BaseModel

from jobboard.core.schemas import CamelModel


class SignupRequest(BaseModel):
    """Signup payload. Fields are optional here so that missing values are
    reported by the auth service with its own messages."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(CamelModel):
    """User fields safe to return to clients."""
    id: str
    name: str
    email: str
    role: str


class UserProfile(UserPublic):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    role: str
    user: UserPublic


class CurrentUserResponse(BaseModel):
    success: bool = True
    user: UserProfile
