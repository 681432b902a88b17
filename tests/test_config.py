"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from matchmaker.config import DEFAULT_JWT_SECRET, Settings

PRODUCTION = {
    "environment": "production",
    "jwt_secret": "a-long-random-access-secret",
    "jwt_refresh_secret": "a-different-refresh-secret",
    "database_url": "postgresql://matchmaker:pw@db:5432/matchmaker",
}


def test_secrets_must_differ():
    with pytest.raises(ValidationError, match="must be different"):
        Settings(jwt_secret="same", jwt_refresh_secret="same")


def test_production_settings():
    settings = Settings(**PRODUCTION)
    assert settings.is_production
    assert not settings.is_development


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET must be changed"):
        Settings(**{**PRODUCTION, "jwt_secret": DEFAULT_JWT_SECRET})


def test_production_rejects_localhost_database():
    with pytest.raises(ValidationError, match="localhost"):
        Settings(**{**PRODUCTION, "database_url": "postgresql://u:p@localhost:5432/m"})
