"""Explicitly constructed application context.

Holds the long-lived, process-wide collaborators (database engine, résumé
storage, hashing and token primitives) so that services receive them as
arguments instead of importing module globals.
"""
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from jobboard.core.config import Settings
from jobboard.core.database import create_tables, make_engine, make_session_factory
from jobboard.core.logging import setup_logging
from jobboard.core.security import PasswordHasher, TokenService
from jobboard.core.storage import LocalResumeStorage, ResumeStorage

logger = setup_logging('context')


class AppContext:
    """Everything a request handler needs beyond the request itself.

    Attributes:
        settings: Runtime configuration
        engine: SQLAlchemy engine
        session_factory: Factory for per-request sessions
        storage: Résumé storage
        passwords: Password hasher
        tokens: Access token service
    """

    def __init__(
        self,
        settings: Settings,
        engine: Engine,
        storage: ResumeStorage,
        passwords: Optional[PasswordHasher] = None,
        tokens: Optional[TokenService] = None,
    ):
        self.settings = settings
        self.engine = engine
        self.session_factory: sessionmaker = make_session_factory(engine)
        self.storage = storage
        self.passwords = passwords or PasswordHasher()
        self.tokens = tokens or TokenService(
            secret=settings.jwt_secret,
            expires_in=settings.jwt_expires_in,
            algorithm=settings.jwt_algorithm,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """Build the production context: configured database and on-disk storage."""
        return cls(
            settings=settings,
            engine=make_engine(settings.database_url),
            storage=LocalResumeStorage(settings.upload_dir, max_bytes=settings.max_resume_bytes),
        )

    def startup(self) -> None:
        """Create tables and the upload directory if they are missing."""
        create_tables(self.engine)
        if isinstance(self.storage, LocalResumeStorage):
            self.storage.ensure_root()
        logger.info(f"Context ready (environment={self.settings.environment})")

    def shutdown(self) -> None:
        self.engine.dispose()
