"""Unit tests for application settings."""

import pytest
from people_finder.config.settings import Settings


class TestSettings:
    """Test cases for the Settings class."""
    
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Ignore settings exported by the surrounding environment."""
        for name in ("STORE_PATH", "MATCH_THRESHOLD", "MIN_MATCH_LENGTH", "SEARCH_DEBOUNCE_MS"):
            monkeypatch.delenv(name, raising=False)
    
    def test_defaults(self):
        """Records stay in memory unless a store path is configured."""
        settings = Settings(_env_file=None)
        
        assert settings.store_path is None
        assert settings.match_threshold == 0.35
        assert settings.min_match_length == 2
        assert settings.search_debounce_ms == 200
    
    def test_environment_override(self, monkeypatch):
        """Environment variables are read case-insensitively."""
        monkeypatch.setenv("store_path", "people.json")
        monkeypatch.setenv("MATCH_THRESHOLD", "0.2")
        settings = Settings(_env_file=None)
        
        assert settings.store_path == "people.json"
        assert settings.match_threshold == 0.2
