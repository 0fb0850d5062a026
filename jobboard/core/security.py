"""Password hashing and access token primitives."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from jobboard.core.errors import AuthError


class Identity(BaseModel):
    """The caller as resolved from a verified token."""
    user_id: str
    role: str


class PasswordHasher:
    """Salted one-way password hashing backed by bcrypt."""

    def __init__(self, schemes=("bcrypt",), **settings):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto", **settings)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # Not a hash this context understands
            return False


class TokenService:
    """Issues and verifies signed bearer tokens carrying ``{id, role}``."""

    def __init__(self, secret: str, expires_in: timedelta, algorithm: str = "HS256"):
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, user_id: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "role": role,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def resolve(self, token: Optional[str]) -> Identity:
        """Verify signature and expiry and return the embedded identity.

        Raises:
            AuthError: If the token is missing, malformed, tampered with or expired
        """
        if not token:
            raise AuthError("Not authorized, no token")

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthError("Token expired")
        except jwt.PyJWTError:
            raise AuthError("Not authorized, token failed")

        user_id, role = payload.get("id"), payload.get("role")
        if not isinstance(user_id, str) or not isinstance(role, str):
            raise AuthError("Not authorized, token failed")

        return Identity(user_id=user_id, role=role)
