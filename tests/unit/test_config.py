"""Unit tests for configuration loading."""

from homeledger.config import DEFAULT_SECRET_KEY, Settings


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, monkeypatch):
        """Defaults apply when nothing is set in the environment."""
        for name in (
            "DATABASE_URL",
            "SECRET_KEY",
            "REGISTRATION_ENABLED",
            "TOKEN_TTL_SECONDS",
            "LOCALE",
            "FRONTEND_URL",
            "RATE_LIMIT_ENABLED",
            "API_RATE_LIMIT",
            "LOGIN_RATE_LIMIT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./homeledger.db"
        assert settings.secret_key == DEFAULT_SECRET_KEY
        assert settings.registration_enabled is False
        assert settings.token_ttl_seconds == 7 * 24 * 3600
        assert settings.locale == "en_AE"
        assert settings.frontend_url == "http://localhost:3333"
        assert settings.rate_limit_enabled is True
        assert settings.api_rate_limit == "100 per 15 minutes"
        assert settings.login_rate_limit == "5 per 15 minutes"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://db/ledger")
        monkeypatch.setenv("REGISTRATION_ENABLED", "true")
        monkeypatch.setenv("TOKEN_TTL_SECONDS", "60")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql://db/ledger"
        assert settings.registration_enabled is True
        assert settings.token_ttl_seconds == 60

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("LOCALE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LOCALE=en_US\nUNRELATED_KEY=ignored\n")

        settings = Settings(_env_file=env_file)

        assert settings.locale == "en_US"
