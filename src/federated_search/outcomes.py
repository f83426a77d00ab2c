"""
Search outcomes.

One outcome is produced per completed (not cancelled) provider lookup.
"""

from dataclasses import dataclass

from .registry import Provider
from .types import ResultItem


@dataclass(frozen=True)
class SearchSuccess:
    provider: Provider
    sequence: int
    items: tuple[ResultItem, ...] = ()


@dataclass(frozen=True)
class SearchFailure:
    provider: Provider
    sequence: int
    code: int = 0
    message: str = ""


SearchOutcome = SearchSuccess | SearchFailure
