from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..models.auth import (
    AuthResponse, CurrentUserResponse, LoginRequest, SignupRequest,
    UserProfile, UserPublic
)
from ..dependencies import get_context, get_db, get_identity

from jobboard.core.context import AppContext
from jobboard.core.security import Identity
from jobboard.features import auth

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Create an account and return its first access token"""
    token, user = auth.signup(
        db,
        context.passwords,
        context.tokens,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return AuthResponse(
        message="Registration successful",
        token=token,
        role=user.role,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Exchange email and password for an access token"""
    token, user = auth.login(
        db,
        context.passwords,
        context.tokens,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        message="Login successful",
        token=token,
        role=user.role,
        user=UserPublic.model_validate(user),
    )


@router.get("/me", response_model=CurrentUserResponse)
def me(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Get the profile of the authenticated user (no password hash)"""
    user = auth.get_current_user(db, identity)
    return CurrentUserResponse(user=UserProfile.model_validate(user))
