"""
Result aggregation.

Consumes search outcomes in arrival order and turns them into render
instructions for a render sink. Completion order across providers is
arbitrary, so after every appended section the sink is told to reorder the
visible sections by provider priority.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from .errors import UNKNOWN_ERROR
from .normalizer import QueryToken
from .outcomes import SearchFailure, SearchOutcome, SearchSuccess
from .registry import Provider
from .types import ResultItem

logger = logging.getLogger("federated_search.aggregator")


@dataclass(frozen=True)
class ResultSection:
    """Render-ready results (or error) of one provider."""

    provider: Provider
    items: tuple[ResultItem, ...] = ()
    error: str | None = None
    error_code: int = 0

    @property
    def title(self) -> str:
        return self.provider.title

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def sort_key(self) -> tuple:
        return (-self.provider.priority, self.provider.order)


@dataclass(frozen=True)
class ClearResults:
    pass


@dataclass(frozen=True)
class AppendSection:
    section: ResultSection


@dataclass(frozen=True)
class ReorderSections:
    sections: tuple[ResultSection, ...]


@dataclass(frozen=True)
class CriticalNotice:
    message: str


RenderInstruction = ClearResults | AppendSection | ReorderSections | CriticalNotice


class RenderSink(Protocol):
    """Receives render instructions. Presentation is entirely the sink's concern."""

    def render(self, instruction: RenderInstruction) -> None: ...


class RecordingRenderSink:
    """Render sink that records instructions and keeps the visible state."""

    def __init__(self):
        self.instructions: list[RenderInstruction] = []
        self.sections: list[ResultSection] = []
        self.notices: list[str] = []

    def render(self, instruction: RenderInstruction) -> None:
        self.instructions.append(instruction)
        if isinstance(instruction, ClearResults):
            self.sections = []
        elif isinstance(instruction, AppendSection):
            self.sections.append(instruction.section)
        elif isinstance(instruction, ReorderSections):
            self.sections = list(instruction.sections)
        elif isinstance(instruction, CriticalNotice):
            self.notices.append(instruction.message)

    @property
    def titles(self) -> list[str]:
        return [section.title for section in self.sections]


def error_summary(code: int, message: str | None) -> str:
    """User-visible error text for a failed provider."""
    return message or UNKNOWN_ERROR


class ResultAggregator:
    """Builds the priority-ordered result view for a search session."""

    def __init__(self, sink: RenderSink):
        self.sink = sink
        self._sections: dict[str, ResultSection] = {}
        self._sequence: int | None = None
        self._needs_clear = False
        self._critical_sent = False

    def begin_cycle(self, token: QueryToken) -> None:
        """Mark the start of a dispatch cycle; prior results clear on its first outcome."""
        self._sequence = token.sequence
        self._needs_clear = True

    def on_outcome(self, outcome: SearchOutcome) -> ResultSection | None:
        """
        Apply one outcome and emit the matching render instructions.

        Args:
            outcome: Success or failure of one provider lookup

        Returns:
            The section that was rendered, or None if the outcome was ignored
        """
        if self._sequence is not None and outcome.sequence != self._sequence:
            logger.debug(
                f"Ignoring outcome of {outcome.provider.name} for sequence "
                f"{outcome.sequence} (current {self._sequence})"
            )
            return None

        if self._needs_clear:
            self._sections.clear()
            self._needs_clear = False
            self.sink.render(ClearResults())

        if isinstance(outcome, SearchSuccess):
            section = ResultSection(provider=outcome.provider, items=tuple(outcome.items))
        elif isinstance(outcome, SearchFailure):
            section = ResultSection(
                provider=outcome.provider,
                error=error_summary(outcome.code, outcome.message),
                error_code=outcome.code,
            )
        else:
            raise TypeError(f"unsupported outcome: {outcome!r}")

        self._sections[outcome.provider.name] = section
        self.sink.render(AppendSection(section))
        self.sink.render(ReorderSections(self.view()))
        return section

    def critical(self, message: str) -> bool:
        """Surface a critical notification. Only the first one is delivered."""
        if self._critical_sent:
            return False
        self._critical_sent = True
        logger.error(f"Critical: {message}")
        self.sink.render(CriticalNotice(message))
        return True

    def view(self) -> tuple[ResultSection, ...]:
        """Current sections ordered by provider priority."""
        return tuple(sorted(self._sections.values(), key=lambda s: s.sort_key))
