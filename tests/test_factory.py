"""
Unit tests for the session and client factories.
"""

import pytest
from conftest import FakeProviderClient

from federated_search.aggregator import RecordingRenderSink
from federated_search.clients import HttpProviderClient, LocalProviderClient
from federated_search.errors import ConfigurationError
from federated_search.factory import create_provider_client, create_session
from federated_search.settings import Settings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FEDSEARCH_PROVIDERS", raising=False)
    monkeypatch.delenv("FEDSEARCH_SERVER_URL", raising=False)


class TestCreateProviderClient:
    def test_server_url_selects_http_client(self):
        client = create_provider_client(
            Settings(server_url="http://search.local/", search_timeout="2s", result_limit=3)
        )

        assert isinstance(client, HttpProviderClient)
        assert client.base_url == "http://search.local"
        assert client.timeout == 2.0
        assert client.limit == 3

    def test_default_is_local_github_backend(self):
        client = create_provider_client(Settings(github_priority=4))

        assert isinstance(client, LocalProviderClient)
        assert client.providers() == ["github"]
        assert client.searchers["github"].priority == 4


class TestCreateSession:
    def test_static_providers_skip_discovery(self):
        settings = Settings(providers="slack:Slack:10,github:Github:5")

        session, discovery = create_session(
            RecordingRenderSink(), settings, client=FakeProviderClient()
        )

        assert discovery is None
        assert [p.name for p in session.registry.list()] == ["slack", "github"]
        assert session.registry.get("github").transform("hello") == "hello extension:md"
        assert session.registry.get("slack").transform("hello") == "hello"

    @pytest.mark.asyncio
    async def test_discovery_from_client(self):
        settings = Settings(quiet_window_ms=0)
        client = create_provider_client(settings)

        session, discovery = create_session(RecordingRenderSink(), settings, client=client)

        assert discovery == client.discover
        assert await session.start(discovery)
        assert [p.title for p in session.registry.list()] == ["Github"]
        assert session.normalizer.quiet_window == 0.0
        await session.aclose()

    def test_invalid_static_priority_fails(self):
        settings = Settings(providers="slack:Slack:high")

        with pytest.raises(ConfigurationError, match="invalid priority"):
            create_session(RecordingRenderSink(), settings, client=FakeProviderClient())
