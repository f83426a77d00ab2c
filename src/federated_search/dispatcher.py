"""
Search Dispatch Logic

Fans every query token out to all registered providers concurrently.
Each provider has at most one live lookup: a new token cancels the
provider's pending lookup before starting the next one, and a cancelled
lookup's result is discarded even if it still arrives.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .aggregator import ResultAggregator
from .errors import ConfigurationError, parse_error
from .normalizer import QueryToken
from .outcomes import SearchFailure, SearchOutcome, SearchSuccess
from .registry import Provider, ProviderRegistry
from .types import ResultItem

logger = logging.getLogger("federated_search.dispatcher")


class ProviderClient(Protocol):
    """Performs the remote lookup for a provider. Raises on failure."""

    async def search(self, provider_name: str, query: str) -> list[ResultItem]: ...


class HandleState(str, Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(eq=False)
class SearchHandle:
    """In-flight lookup of one provider for one query token."""

    provider: Provider
    sequence: int
    query: str
    state: HandleState = HandleState.PENDING
    task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def is_live(self) -> bool:
        return self.state is HandleState.PENDING

    def cancel(self) -> bool:
        """Mark cancelled and signal the running lookup. Returns False if already terminal."""
        if not self.is_live:
            return False
        self.state = HandleState.CANCELLED
        if self.task is not None and not self.task.done():
            self.task.cancel()
        return True

    def complete(self) -> bool:
        """Mark completed. Returns False if the handle was already cancelled or completed."""
        if not self.is_live:
            return False
        self.state = HandleState.COMPLETED
        return True


@dataclass
class DispatchCycle:
    """All handles started for one query token."""

    token: QueryToken
    handles: dict[str, SearchHandle] = field(default_factory=dict)

    @property
    def pending(self) -> list[str]:
        return [name for name, handle in self.handles.items() if handle.is_live]

    @property
    def is_settled(self) -> bool:
        return not self.pending


class SearchDispatcher:
    """
    Dispatches query tokens to every provider with latest-wins cancellation.
    Must be driven from a single event loop.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        client: ProviderClient,
        aggregator: ResultAggregator,
    ):
        self.registry = registry
        self.client = client
        self.aggregator = aggregator

        self._providers: list[Provider] | None = None
        self._live: dict[str, SearchHandle] = {}
        self._last_sequence: int | None = None
        self.cycle: DispatchCycle | None = None

    @property
    def started(self) -> bool:
        return self._providers is not None

    def start(self) -> list[Provider]:
        """
        Snapshot and freeze the provider set.

        Returns:
            Providers in dispatch order

        Raises:
            ConfigurationError: If no provider is registered
        """
        providers = self.registry.list()
        if not providers:
            raise ConfigurationError("no available provider to search")

        self.registry.freeze()
        self._providers = providers
        logger.info(
            f"🚀 Dispatcher started with {len(providers)} providers: "
            f"{', '.join(p.name for p in providers)}"
        )
        return providers

    def on_query_token(self, token: QueryToken) -> DispatchCycle:
        """
        Start one lookup per provider for the token, cancelling stale lookups first.

        Args:
            token: Next query token, with a sequence greater than any previous one

        Returns:
            The new dispatch cycle
        """
        if self._providers is None:
            raise RuntimeError("dispatcher has not been started")
        if self._last_sequence is not None and token.sequence <= self._last_sequence:
            raise ValueError(
                f"query token sequence {token.sequence} is not after {self._last_sequence}"
            )
        self._last_sequence = token.sequence

        loop = asyncio.get_running_loop()
        self.aggregator.begin_cycle(token)
        cycle = DispatchCycle(token=token)

        logger.info(f"🔍 [{token.sequence}] Dispatching '{token.text}'")
        for provider in self._providers:
            previous = self._live.pop(provider.name, None)
            if previous is not None and previous.cancel():
                logger.debug(
                    f"[{token.sequence}] Cancelled {provider.name} lookup "
                    f"from sequence {previous.sequence}"
                )

            try:
                query = provider.transform(token.text)
            except Exception as e:
                handle = SearchHandle(
                    provider=provider, sequence=token.sequence, query=token.text
                )
                self._live[provider.name] = handle
                cycle.handles[provider.name] = handle
                logger.warning(
                    f"❌ [{token.sequence}] {provider.name} query transform failed: {e}"
                )
                self._complete(
                    handle,
                    SearchFailure(
                        provider=provider,
                        sequence=token.sequence,
                        message=parse_error(e).message,
                    ),
                )
                continue

            handle = SearchHandle(provider=provider, sequence=token.sequence, query=query)
            self._live[provider.name] = handle
            cycle.handles[provider.name] = handle
            handle.task = loop.create_task(
                self._lookup(handle),
                name=f"search:{provider.name}:{token.sequence}",
            )

        self.cycle = cycle
        return cycle

    async def _lookup(self, handle: SearchHandle) -> None:
        provider = handle.provider
        started = time.monotonic()
        outcome: SearchOutcome
        try:
            items = tuple(await self.client.search(provider.name, handle.query))
        except asyncio.CancelledError:
            if handle.is_live:
                # cancelled from outside the dispatcher, e.g. loop shutdown
                handle.state = HandleState.CANCELLED
                if self._live.get(provider.name) is handle:
                    del self._live[provider.name]
            logger.debug(
                f"[{handle.sequence}] {provider.name} lookup cancelled after "
                f"{time.monotonic() - started:.2f} seconds"
            )
            raise
        except Exception as e:
            error = parse_error(e)
            logger.warning(
                f"❌ [{handle.sequence}] {provider.name} failed: {error.message} ({error.code})"
            )
            outcome = SearchFailure(
                provider=provider,
                sequence=handle.sequence,
                code=error.code,
                message=error.message,
            )
        else:
            logger.info(
                f"✅ [{handle.sequence}] {provider.name} returned {len(items)} results "
                f"in {time.monotonic() - started:.2f} seconds"
            )
            outcome = SearchSuccess(
                provider=provider, sequence=handle.sequence, items=items
            )

        self._complete(handle, outcome)

    def _complete(self, handle: SearchHandle, outcome: SearchOutcome) -> bool:
        """Forward the outcome if the handle is still live, otherwise discard it."""
        if not handle.complete():
            logger.debug(
                f"[{handle.sequence}] Discarding stale result from {handle.provider.name}"
            )
            return False

        if self._live.get(handle.provider.name) is handle:
            del self._live[handle.provider.name]
        self.aggregator.on_outcome(outcome)
        return True

    def live_handles(self) -> dict[str, SearchHandle]:
        """Snapshot of the live handle per provider."""
        return dict(self._live)

    async def run(self, tokens: AsyncIterable[QueryToken]) -> None:
        """Dispatch every token of the stream in order."""
        if not self.started:
            self.start()
        async for token in tokens:
            self.on_query_token(token)

    async def drain(self) -> None:
        """Wait until no lookup is live."""
        while True:
            tasks = [
                h.task
                for h in self._live.values()
                if h.task is not None and not h.task.done()
            ]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel every live lookup and wait for the tasks to finish."""
        handles = list(self._live.values())
        self._live.clear()
        for handle in handles:
            handle.cancel()
        tasks = [h.task for h in handles if h.task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
