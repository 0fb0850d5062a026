"""Root conftest.py: shared fixtures for service and API tests."""
from typing import Iterator

import pytest

from jobboard.core.config import Settings
from jobboard.core.context import AppContext
from jobboard.core.database import create_tables, make_engine
from jobboard.core.errors import NotFoundError
from jobboard.core.models import User, UserRole
from jobboard.core.security import Identity, PasswordHasher
from jobboard.core.storage import ResumeStorage, check_stored_name, generate_resume_name


def pytest_configure(config):
    config.addinivalue_line("markers", "api: tests that go through the HTTP layer")


class MemoryResumeStorage(ResumeStorage):
    """In-memory stand-in for the upload directory."""

    def __init__(self, max_bytes: int = 1024 * 1024):
        super().__init__(max_bytes)
        self.files = {}

    def save(self, content: bytes, original_name: str) -> str:
        self.validate_upload(content, original_name)
        filename = generate_resume_name(original_name)
        self.files[filename] = content
        return filename

    def exists(self, filename: str) -> bool:
        return check_stored_name(filename) in self.files

    def iter_bytes(self, filename: str) -> Iterator[bytes]:
        if filename not in self.files:
            raise NotFoundError("Resume file not found")
        return iter([self.files[filename]])

    def delete(self, filename: str) -> None:
        self.files.pop(filename, None)


def build_context(database_url: str = "sqlite://", **overrides) -> AppContext:
    """Context with a throwaway database, in-memory storage and cheap hashing."""
    values = {"jwt_secret": "test-secret", "environment": "development"}
    values.update(overrides)
    settings = Settings(database_url=database_url, **values)
    context = AppContext(
        settings=settings,
        engine=make_engine(database_url),
        storage=MemoryResumeStorage(),
        passwords=PasswordHasher(bcrypt__rounds=4),
    )
    create_tables(context.engine)
    return context


@pytest.fixture
def context():
    """Fresh application context backed by an in-memory database."""
    ctx = build_context()
    yield ctx
    ctx.shutdown()


@pytest.fixture
def storage(context):
    return context.storage


@pytest.fixture
def db(context):
    """Database session for service-level tests."""
    session = context.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert an account directly and return its identity."""
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.JOB_SEEKER, name: str = None) -> Identity:
        counter["n"] += 1
        user = User(
            name=name or f"{role.value} {counter['n']}",
            email=f"{role.value.lower()}{counter['n']}@example.com",
            password="not-a-real-hash",
            role=role.value,
        )
        db.add(user)
        db.commit()
        return Identity(user_id=user.id, role=user.role)

    return _make_user


@pytest.fixture
def context_factory():
    """Build extra contexts (e.g. file-backed databases) torn down after the test."""
    contexts = []

    def _factory(database_url: str, **overrides) -> AppContext:
        ctx = build_context(database_url, **overrides)
        contexts.append(ctx)
        return ctx

    yield _factory
    for ctx in contexts:
        ctx.shutdown()
