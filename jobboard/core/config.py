"""Application settings loaded from the environment.

Values come from environment variables, optionally seeded from a ``.env``
file via python-dotenv. ``Settings.from_env()`` is the only place the process
environment is read; everything else receives a ``Settings`` instance.
"""
import os
import re
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from jobboard.core.errors import ConfigurationError
from jobboard.core.logging import setup_logging

logger = setup_logging('config')

DEVELOPMENT_JWT_SECRET = "development-only-secret-do-not-use-in-production"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """Parse a token lifetime such as ``3600``, ``30m``, ``1h`` or ``7d``.

    A bare number is taken as seconds.

    Raises:
        ConfigurationError: If the value is not a positive duration
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ConfigurationError(f"Invalid duration: {value!r}")

    amount, unit = int(match.group(1)), match.group(2)
    if amount <= 0:
        raise ConfigurationError(f"Duration must be positive: {value!r}")

    return timedelta(**{_DURATION_UNITS[unit]: amount})


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


class Settings(BaseModel):
    """Runtime configuration for the job board service.

    Attributes:
        database_url: SQLAlchemy database URL
        jwt_secret: Key used to sign access tokens
        jwt_expires_in: Access token lifetime
        upload_dir: Flat directory holding uploaded résumés
        max_resume_bytes: Largest accepted résumé upload
        environment: ``development`` or ``production``
        cors_origins: Origins allowed by the CORS middleware
        strict_status_workflow: Enforce pending -> reviewed -> accepted/rejected
    """
    database_url: str = "sqlite:///./jobboard.db"
    jwt_secret: str = DEVELOPMENT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_in: timedelta = timedelta(hours=1)
    upload_dir: Path = Path("uploads")
    max_resume_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    environment: str = "development"
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    strict_status_workflow: bool = False

    @property
    def expose_error_details(self) -> bool:
        """Error details (exception text) are only returned in development."""
        return self.environment == "development"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from the process environment.

        Args:
            env_file: Optional path to a dotenv file; defaults to ``.env`` lookup

        Raises:
            ConfigurationError: If a value is malformed or a production
                deployment has no JWT secret
        """
        load_dotenv(env_file)

        environment = os.getenv("ENVIRONMENT", "development").strip().lower()
        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            if environment == "production":
                raise ConfigurationError("JWT_SECRET must be set in production")
            logger.warning("JWT_SECRET not set, using the development signing key")
            jwt_secret = DEVELOPMENT_JWT_SECRET

        try:
            max_resume_bytes = int(os.getenv("MAX_RESUME_BYTES", str(5 * 1024 * 1024)))
        except ValueError:
            raise ConfigurationError("MAX_RESUME_BYTES must be an integer")

        jwt_expires_in = parse_duration(os.getenv("JWT_EXPIRES_IN", "1h"))

        try:
            return cls(
                database_url=os.getenv("DATABASE_URL", "sqlite:///./jobboard.db"),
                jwt_secret=jwt_secret,
                jwt_expires_in=jwt_expires_in,
                upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
                max_resume_bytes=max_resume_bytes,
                environment=environment,
                cors_origins=[
                    origin.strip()
                    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
                    if origin.strip()
                ],
                strict_status_workflow=_parse_bool(os.getenv("STRICT_STATUS_WORKFLOW", "false")),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}")
