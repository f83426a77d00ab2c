"""
Shared test helpers for the federated search tests.
"""

import asyncio

import pytest

from federated_search.registry import Provider, ProviderRegistry
from federated_search.types import ResultItem


def make_item(title: str, link: str = "http://x", description: str = "") -> ResultItem:
    return ResultItem(title=title, link=link, description=description, timestamp=None)


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeProviderClient:
    """Provider client whose lookups complete only when the test says so."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.cancelled: list[tuple[str, str]] = []
        self._pending: dict[tuple[str, str], asyncio.Future] = {}

    async def search(self, provider_name: str, query: str):
        key = (provider_name, query)
        self.calls.append(key)
        future = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            return await future
        except asyncio.CancelledError:
            self.cancelled.append(key)
            raise

    def resolve(self, provider_name: str, query: str, items) -> None:
        self._pending[(provider_name, query)].set_result(list(items))

    def resolve_raw(self, provider_name: str, query: str, value) -> None:
        """Answer with a value as-is, even one that is not a result list."""
        self._pending[(provider_name, query)].set_result(value)

    def reject(self, provider_name: str, query: str, error: Exception) -> None:
        self._pending[(provider_name, query)].set_exception(error)


class StubbornProviderClient(FakeProviderClient):
    """Provider client that ignores cancellation and answers anyway."""

    async def search(self, provider_name: str, query: str):
        key = (provider_name, query)
        self.calls.append(key)
        future = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            self.cancelled.append(key)
            return await future


@pytest.fixture
def fake_client():
    return FakeProviderClient()


@pytest.fixture
def registry():
    """Registry with slack (priority 10) and github (priority 5)."""
    registry = ProviderRegistry()
    registry.register(Provider(name="github", title="Github", priority=5))
    registry.register(Provider(name="slack", title="Slack", priority=10))
    return registry
