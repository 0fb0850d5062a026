from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Iterator, Optional

from jobboard.core.context import AppContext
from jobboard.core.models import UserRole
from jobboard.core.security import Identity
from jobboard.features.access import require_role
from jobboard.features.auth import resolve_token

# Missing tokens are reported through AuthError, not FastAPI's default 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_context(request: Request) -> AppContext:
    """Get the application context attached by create_app()"""
    return request.app.state.context


def get_db(context: AppContext = Depends(get_context)) -> Iterator[Session]:
    """Per-request database session"""
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_identity(
    token: Optional[str] = Depends(oauth2_scheme),
    context: AppContext = Depends(get_context),
) -> Identity:
    """Verify the bearer token and return the caller's identity"""
    return resolve_token(context.tokens, token)


def require_roles(*roles: UserRole):
    """Dependency factory gating a route to the given roles"""
    def dependency(identity: Identity = Depends(get_identity)) -> Identity:
        return require_role(identity, roles)

    return dependency
