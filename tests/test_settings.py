"""
Tests for environment-driven settings.
"""
from config import Settings, get_settings


class TestSettings:
    """Tests for the settings model."""

    def test_reads_dotenv_file(self):
        assert Settings.model_config["env_file"] == ".env"
        assert Settings.model_config["env_file_encoding"] == "utf-8"

    def test_defaults_without_env_file(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("API_PORT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_port == 8000
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "9001")
        monkeypatch.setenv("SQL_ECHO", "true")
        settings = Settings(_env_file=None)
        assert settings.api_port == 9001
        assert settings.sql_echo is True

    def test_database_url_comes_from_environment(self):
        assert get_settings().database_url.endswith("test.db")
