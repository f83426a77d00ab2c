"""
Unit tests for Settings.
"""

import pytest

from federated_search.errors import ConfigurationError
from federated_search.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for key in [
        "FEDSEARCH_PROVIDERS",
        "FEDSEARCH_SERVER_URL",
        "FEDSEARCH_SEARCH_TIMEOUT",
        "FEDSEARCH_QUIET_WINDOW_MS",
        "FEDSEARCH_QUERY_SUFFIXES",
    ]:
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.min_query_length == 3
        assert settings.quiet_window == 1.0
        assert settings.search_timeout_seconds == 5.0
        assert settings.server_url == ""
        assert settings.providers_list == []
        assert settings.query_suffixes == {"github": " extension:md"}

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FEDSEARCH_SEARCH_TIMEOUT", "2s")
        monkeypatch.setenv("FEDSEARCH_QUIET_WINDOW_MS", "250")
        monkeypatch.setenv("FEDSEARCH_QUERY_SUFFIXES", '{"slack": " in:#general"}')

        settings = Settings()

        assert settings.search_timeout_seconds == 2.0
        assert settings.quiet_window == 0.25
        assert settings.query_suffixes == {"slack": " in:#general"}

    def test_invalid_timeout_falls_back(self):
        assert Settings(search_timeout="soon").search_timeout_seconds == 5.0

    def test_providers_list(self):
        settings = Settings(providers="slack:Slack:10, github:Github:5,wiki")

        assert settings.providers_list == [
            {"name": "slack", "title": "Slack", "priority": 10},
            {"name": "github", "title": "Github", "priority": 5},
            {"name": "wiki", "title": "wiki", "priority": 0},
        ]

    def test_providers_list_skips_blank_entries(self):
        settings = Settings(providers="slack::,,")
        assert settings.providers_list == [
            {"name": "slack", "title": "slack", "priority": 0}
        ]

    def test_non_numeric_priority_is_rejected(self):
        settings = Settings(providers="slack:Slack:high")

        with pytest.raises(ConfigurationError, match="invalid priority 'high' for provider 'slack'"):
            settings.providers_list
