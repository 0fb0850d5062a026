"""Tests for settings loading."""
from datetime import timedelta
from pathlib import Path

import pytest

from jobboard.core.config import DEVELOPMENT_JWT_SECRET, Settings, parse_duration
from jobboard.core.errors import ConfigurationError

ENV_VARS = [
    "DATABASE_URL", "JWT_SECRET", "JWT_EXPIRES_IN", "UPLOAD_DIR", "MAX_RESUME_BYTES",
    "ENVIRONMENT", "CORS_ORIGINS", "STRICT_STATUS_WORKFLOW",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def env_file(tmp_path):
    # Points at a file that does not exist so no real .env is read
    return str(tmp_path / "missing.env")


@pytest.mark.parametrize("value,expected", [
    ("3600", timedelta(seconds=3600)),
    ("45s", timedelta(seconds=45)),
    ("30m", timedelta(minutes=30)),
    ("1h", timedelta(hours=1)),
    ("7d", timedelta(days=7)),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "0", "1w", "abc", "-5m"])
def test_parse_duration_rejects(value):
    with pytest.raises(ConfigurationError):
        parse_duration(value)


def test_defaults(clean_env, env_file):
    settings = Settings.from_env(env_file)
    assert settings.database_url == "sqlite:///./jobboard.db"
    assert settings.jwt_secret == DEVELOPMENT_JWT_SECRET
    assert settings.jwt_expires_in == timedelta(hours=1)
    assert settings.environment == "development"
    assert settings.expose_error_details
    assert settings.strict_status_workflow is False


def test_from_env(clean_env, env_file):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("JWT_SECRET", "s3cret")
    clean_env.setenv("JWT_EXPIRES_IN", "15m")
    clean_env.setenv("UPLOAD_DIR", "/srv/resumes")
    clean_env.setenv("MAX_RESUME_BYTES", "1024")
    clean_env.setenv("ENVIRONMENT", "Production")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    clean_env.setenv("STRICT_STATUS_WORKFLOW", "yes")

    settings = Settings.from_env(env_file)
    assert settings.jwt_secret == "s3cret"
    assert settings.jwt_expires_in == timedelta(minutes=15)
    assert settings.upload_dir == Path("/srv/resumes")
    assert settings.max_resume_bytes == 1024
    assert settings.environment == "production"
    assert not settings.expose_error_details
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.strict_status_workflow is True


def test_production_requires_jwt_secret(clean_env, env_file):
    clean_env.setenv("ENVIRONMENT", "production")
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        Settings.from_env(env_file)


@pytest.mark.parametrize("value", ["lots", "0", "-5"])
def test_malformed_size(clean_env, env_file, value):
    clean_env.setenv("MAX_RESUME_BYTES", value)
    with pytest.raises(ConfigurationError):
        Settings.from_env(env_file)
