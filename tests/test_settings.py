"""
Tests for configuration loading
"""

import pytest
from pydantic import ValidationError

from usersvc.schemas import QueryOptions
from usersvc.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.database.url.startswith("sqlite+aiosqlite")
        assert settings.pagination.default_limit == 10
        assert settings.pagination.default_offset == 0
        assert settings.security.password_iterations == 100_000

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("USERSVC_DATABASE__URL", "postgresql+asyncpg://localhost/users")
        monkeypatch.setenv("USERSVC_PAGINATION__DEFAULT_LIMIT", "25")

        settings = Settings(_env_file=None)

        assert settings.database.url == "postgresql+asyncpg://localhost/users"
        assert settings.pagination.default_limit == 25

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestQueryOptions:
    def test_defaults(self):
        options = QueryOptions()

        assert options.order is None
        assert options.limit == 10
        assert options.offset == 0

    def test_rejects_invalid_values(self):
        with pytest.raises(ValidationError):
            QueryOptions(limit=0)
        with pytest.raises(ValidationError):
            QueryOptions(offset=-1)
        with pytest.raises(ValidationError):
            QueryOptions(page=2)
