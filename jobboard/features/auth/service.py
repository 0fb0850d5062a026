"""Account creation, login and identity lookup."""
import re
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import (
    AuthError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from jobboard.core.logging import setup_logging
from jobboard.core.models import User, UserRole
from jobboard.core.security import Identity, PasswordHasher, TokenService

logger = setup_logging('auth')

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
SIGNUP_ROLES = (UserRole.JOB_SEEKER.value, UserRole.COMPANY.value)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def signup(
    db: Session,
    passwords: PasswordHasher,
    tokens: TokenService,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str] = None,
) -> Tuple[str, User]:
    """Register an account and issue its first token.

    Returns:
        ``(token, user)``

    Raises:
        ValidationError: Missing field, malformed email, short password or
            a role other than jobSeeker/company
        ConflictError: The normalized email is already registered
    """
    name = (name or "").strip()
    email = normalize_email(email or "")
    password = (password or "").strip()
    role = (role or UserRole.JOB_SEEKER.value).strip()

    if not name or not email or not password:
        raise ValidationError("All fields are required")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if role not in SIGNUP_ROLES:
        raise ValidationError("Invalid role")

    if db.scalar(select(User).where(User.email == email)) is not None:
        raise ConflictError("Email already registered")

    user = User(name=name, email=email, password=passwords.hash(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise ConflictError("Email already registered")

    logger.info(f"Registered {role} account {user.id}")
    return tokens.issue(user.id, user.role), user


def login(
    db: Session,
    passwords: PasswordHasher,
    tokens: TokenService,
    email: Optional[str],
    password: Optional[str],
) -> Tuple[str, User]:
    """Verify credentials and issue a fresh token.

    Unknown email and wrong password fail with the same message.
    """
    email = normalize_email(email or "")
    password = (password or "").strip()
    if not email or not password:
        raise ValidationError("Email and password required")

    user = db.scalar(select(User).where(User.email == email))
    if user is None or not passwords.verify(password, user.password):
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError()

    return tokens.issue(user.id, user.role), user


def resolve_token(tokens: TokenService, token: Optional[str]) -> Identity:
    """Gate for every non-public route."""
    return tokens.resolve(token)


def get_current_user(db: Session, identity: Identity) -> User:
    """Load the account behind a verified token.

    Raises:
        NotFoundError: The account was removed after the token was issued
    """
    if not identity.user_id:
        raise AuthError()
    user = db.get(User, identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
