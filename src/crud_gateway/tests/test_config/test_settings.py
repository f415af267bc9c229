import pytest
from pydantic import ValidationError

from crud_gateway.config.settings import Settings


class TestDatabaseUrl:

    def test_composed_from_postgres_parts(self):
        settings = Settings(
            DB_URI=None,
            POSTGRES_USERNAME="app",
            POSTGRES_PASSWORD="pw",
            POSTGRES_HOST="db",
            POSTGRES_PORT=6543,
            POSTGRES_DB="company",
        )

        assert settings.DATABASE_URL == "postgresql+psycopg://app:pw@db:6543/company"

    @pytest.mark.parametrize("scheme", ["postgres", "postgresql"])
    def test_plain_db_uri_gets_async_driver(self, scheme):
        settings = Settings(DB_URI=f"{scheme}://u:p@host:5432/db")

        assert settings.DATABASE_URL == "postgresql+psycopg://u:p@host:5432/db"

    def test_db_uri_with_explicit_driver_is_kept(self):
        settings = Settings(DB_URI="postgresql+asyncpg://u:p@host/db")

        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@host/db"


class TestNormalization:

    def test_log_level_and_format_are_case_insensitive(self):
        settings = Settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT")

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_FORMAT == "text"

    def test_unknown_log_format_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(LOG_FORMAT="xml")

    @pytest.mark.parametrize("prefix, expected", [("/api/v1/", "/api/v1"), ("api", "/api"), ("/", "")])
    def test_api_prefix(self, prefix, expected):
        assert Settings(API_PREFIX=prefix).API_PREFIX == expected

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert Settings().PORT == 8080
