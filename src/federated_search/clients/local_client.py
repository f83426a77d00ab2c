"""
In-process provider client.

Runs search backends directly in the event loop with a per-call timeout.
"""

import asyncio
import logging
from collections.abc import Iterable

from ..backends.base import Searcher
from ..errors import ProviderCallError
from ..types import ProviderRecord, ResultItem

logger = logging.getLogger("federated_search.clients.local")


class LocalProviderClient:
    """Provider client that calls in-process Searcher backends."""

    def __init__(self, searchers: Iterable[Searcher], timeout: float = 5.0, page: int = 1):
        self.searchers: dict[str, Searcher] = {s.name: s for s in searchers}
        self.timeout = timeout
        self.page = page

    def providers(self) -> list[str]:
        """Sorted names of the available backends."""
        return sorted(self.searchers)

    async def discover(self) -> list[ProviderRecord]:
        """Provider records for all backends."""
        return [searcher.record() for searcher in self.searchers.values()]

    async def search(self, provider_name: str, query: str) -> list[ResultItem]:
        """
        Search one backend.

        Raises:
            ProviderCallError: 400 for an unknown provider or empty keyword,
                504 on timeout, 500 for any other backend failure
        """
        searcher = self.searchers.get(provider_name)
        if searcher is None:
            raise ProviderCallError(
                400,
                f"invalid search provider. Possible search providers are {self.providers()}",
            )
        if not query:
            raise ProviderCallError(400, "missing keyword")

        try:
            return await asyncio.wait_for(
                searcher.search(query, page=self.page), self.timeout
            )
        except asyncio.TimeoutError:
            raise ProviderCallError(504, "timeout") from None
        except ProviderCallError:
            raise
        except Exception as e:
            logger.exception(f"Backend {provider_name} failed for '{query}'")
            raise ProviderCallError(500, f"failed to search due to {e}") from e

    async def aclose(self) -> None:
        for searcher in self.searchers.values():
            await searcher.aclose()
