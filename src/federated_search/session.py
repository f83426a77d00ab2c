"""
Search session.

Wires the normalizer, registry, dispatcher and aggregator for one user
session, runs startup (optional provider discovery) and drives input
events through the pipeline.
"""

import logging
from collections.abc import AsyncIterable, Awaitable, Callable, Mapping

from .aggregator import RenderSink, ResultAggregator, ResultSection
from .dispatcher import ProviderClient, SearchDispatcher
from .errors import ConfigurationError, parse_error
from .normalizer import InputEvent, InputEventKind, QueryNormalizer
from .registry import ProviderRegistry, QueryTransform
from .types import ProviderRecord

logger = logging.getLogger("federated_search.session")

ProviderDiscovery = Callable[[], Awaitable[list[ProviderRecord]]]


class SearchSession:
    """One search session: input events in, render instructions out."""

    def __init__(
        self,
        registry: ProviderRegistry,
        client: ProviderClient,
        sink: RenderSink,
        *,
        normalizer: QueryNormalizer | None = None,
        transforms: Mapping[str, QueryTransform] | None = None,
    ):
        self.registry = registry
        self.client = client
        self.normalizer = normalizer or QueryNormalizer()
        self.transforms = dict(transforms or {})
        self.aggregator = ResultAggregator(sink)
        self.dispatcher = SearchDispatcher(registry, client, self.aggregator)

    @property
    def started(self) -> bool:
        return self.dispatcher.started

    async def start(self, discovery: ProviderDiscovery | None = None) -> bool:
        """
        Register discovered providers (if any) and start the dispatcher.

        Failures are surfaced once as a critical notification and leave the
        session unstarted.

        Args:
            discovery: Optional coroutine function returning provider records

        Returns:
            True if the session is ready to dispatch
        """
        if discovery is not None:
            try:
                records = await discovery()
            except Exception as e:
                error = parse_error(e)
                self.aggregator.critical(
                    f"could not retrieve providers: {error.message} ({error.code})"
                )
                return False

            try:
                for record in records:
                    self.registry.register_record(record, self.transforms)
            except ConfigurationError as e:
                self.aggregator.critical(f"could not retrieve providers: {e}")
                return False

        try:
            self.dispatcher.start()
        except ConfigurationError as e:
            self.aggregator.critical(str(e))
            return False
        return True

    def submit(self, event: InputEvent) -> bool:
        """
        Feed one input event. Returns True if it started a dispatch cycle.
        """
        if not self.started:
            return False
        token = self.normalizer.accept(event)
        if token is None:
            return False
        self.dispatcher.on_query_token(token)
        return True

    async def run(self, events: AsyncIterable[InputEvent]) -> None:
        """Dispatch every accepted event of the stream, then wait for pending lookups."""
        if not self.started:
            logger.warning("Session not started, ignoring input")
            return
        await self.dispatcher.run(self.normalizer.tokens(events))
        await self.dispatcher.drain()

    async def search(self, text: str) -> tuple[ResultSection, ...]:
        """
        Run a single submitted query to completion.

        Returns:
            The priority-ordered sections, empty if the query was filtered out
        """
        if not self.submit(InputEvent(text=text, kind=InputEventKind.SUBMIT_CLICK)):
            return ()
        await self.dispatcher.drain()
        return self.aggregator.view()

    async def aclose(self) -> None:
        await self.dispatcher.aclose()
