"""Tests for the auth service and token primitives."""
from datetime import timedelta

import jwt
import pytest

from jobboard.core.errors import AuthError, ConflictError, InvalidCredentialsError, NotFoundError
from jobboard.core.models import User
from jobboard.core.security import Identity, TokenService
from jobboard.features import auth


def signup(context, db, email="alice@x.com", role=None):
    return auth.signup(db, context.passwords, context.tokens, "Alice", email, "secret123", role)


def test_signup_hashes_password_and_embeds_identity(context, db):
    token, user = signup(context, db, role="company")

    assert user.password != "secret123"
    assert context.passwords.verify("secret123", user.password)
    assert context.tokens.resolve(token) == Identity(user_id=user.id, role="company")


@pytest.mark.parametrize("role", ["jobSeeker", "company"])
def test_signup_keeps_requested_role(context, db, role):
    _, user = signup(context, db, role=role)
    assert db.get(User, user.id).role == role


def test_signup_email_is_case_and_space_insensitive(context, db):
    signup(context, db, email="ALICE@X.com ")
    with pytest.raises(ConflictError):
        signup(context, db, email="alice@x.com")


def test_login_enumeration_resistance(context, db):
    signup(context, db)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth.login(db, context.passwords, context.tokens, "alice@x.com", "nope-nope")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        auth.login(db, context.passwords, context.tokens, "bob@x.com", "secret123")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"


def test_login_issues_fresh_token(context, db):
    _, user = signup(context, db)
    token, logged_in = auth.login(db, context.passwords, context.tokens, " Alice@X.com", "secret123")

    assert logged_in.id == user.id
    assert auth.resolve_token(context.tokens, token).user_id == user.id


def test_get_current_user_missing(context, db):
    with pytest.raises(NotFoundError):
        auth.get_current_user(db, Identity(user_id="a" * 24, role="jobSeeker"))


def test_token_service_rejections():
    tokens = TokenService("secret", timedelta(hours=1))

    with pytest.raises(AuthError, match="no token"):
        tokens.resolve(None)
    with pytest.raises(AuthError):
        tokens.resolve("not.a.jwt")
    with pytest.raises(AuthError):
        tokens.resolve(TokenService("other", timedelta(hours=1)).issue("a" * 24, "company"))
    with pytest.raises(AuthError, match="expired"):
        tokens.resolve(TokenService("secret", timedelta(seconds=-1)).issue("a" * 24, "company"))

    no_role = jwt.encode({"id": "a" * 24}, "secret", algorithm="HS256")
    with pytest.raises(AuthError):
        tokens.resolve(no_role)
