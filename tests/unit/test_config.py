"""Tests for application configuration."""

from app.config import Settings


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_env(self, monkeypatch):
        """Test: Settings reads environment variables."""
        monkeypatch.setenv("API_TITLE", "Test API")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DATA_FILE", "/tmp/slots.json")

        test_settings = Settings()
        assert test_settings.api_title == "Test API"
        assert test_settings.debug is True
        assert test_settings.port == 9000
        assert test_settings.data_file == "/tmp/slots.json"

    def test_settings_debug_parses_boolean(self, monkeypatch):
        """Test: Boolean flags are parsed from strings."""
        monkeypatch.setenv("DEBUG", "True")
        assert Settings().debug is True

        monkeypatch.setenv("DEBUG", "false")
        assert Settings().debug is False

    def test_storage_bounds_parse_numbers(self, monkeypatch):
        """Test: Remote call bounds are numeric."""
        monkeypatch.setenv("STORAGE_TIMEOUT", "2.5")
        monkeypatch.setenv("STORAGE_RETRIES", "5")

        test_settings = Settings()
        assert test_settings.storage_timeout == 2.5
        assert test_settings.storage_retries == 5

    def test_remote_storage_requires_sheet_id(self, monkeypatch):
        """Test: Sheets backend is only attempted with a sheet id."""
        monkeypatch.setenv("GOOGLE_SHEET_ID", "")
        assert Settings().use_remote_storage is False

        monkeypatch.setenv("GOOGLE_SHEET_ID", "sheet-123")
        assert Settings().use_remote_storage is True

    def test_environment_flags(self, monkeypatch):
        """Test: Environment name is case-insensitive."""
        monkeypatch.setenv("ENVIRONMENT", "Production")
        test_settings = Settings()

        assert test_settings.is_production is True
        assert test_settings.is_development is False
