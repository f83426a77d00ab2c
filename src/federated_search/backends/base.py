"""
Base class for in-process search backends.
"""

from abc import ABC, abstractmethod

from ..types import ProviderRecord, ResultItem


class Searcher(ABC):
    """A search backend that queries one external service."""

    name: str
    title: str = ""
    priority: int = 0

    @abstractmethod
    async def search(self, keyword: str, page: int = 1) -> list[ResultItem]:
        """Return results for the keyword. Raise on failure."""
        ...

    def record(self) -> ProviderRecord:
        """Describe this backend as a provider record."""
        return ProviderRecord(
            name=self.name, title=self.title or self.name, priority=self.priority
        )

    async def aclose(self) -> None:
        """Release any resources held by the backend."""
