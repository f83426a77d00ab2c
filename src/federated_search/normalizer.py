"""
Query normalization.

Turns raw input events (clicks, key presses) into a clean sequence of
query tokens: only commit events pass, short queries are dropped, a query
equal to the previous accepted one is suppressed, and accepted queries are
throttled by a quiet window.
"""

import logging
import time
from collections.abc import AsyncIterable, AsyncIterator, Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("federated_search.normalizer")


class InputEventKind(str, Enum):
    SUBMIT_CLICK = "submit-click"
    KEY_COMMIT = "key-commit"
    KEY_PRESS = "key-press"
    CHANGE = "change"


COMMIT_KINDS = frozenset({InputEventKind.SUBMIT_CLICK, InputEventKind.KEY_COMMIT})


@dataclass(frozen=True)
class InputEvent:
    """A raw input event from the input source."""

    text: str
    kind: InputEventKind

    @classmethod
    def from_key(cls, text: str, key: str, commit_key: str = "Enter") -> "InputEvent":
        """Build an event from a key release, treating the commit key as a submit."""
        kind = InputEventKind.KEY_COMMIT if key == commit_key else InputEventKind.KEY_PRESS
        return cls(text=text, kind=kind)


@dataclass(frozen=True)
class QueryToken:
    """An accepted query, numbered in acceptance order."""

    text: str
    sequence: int


class QueryNormalizer:
    """Filters raw input events into throttled, deduplicated query tokens."""

    def __init__(
        self,
        min_length: int = 3,
        quiet_window: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            min_length: Minimum number of characters in an accepted query
            quiet_window: Seconds during which events after an acceptance are ignored
            clock: Monotonic clock returning seconds
        """
        self.min_length = min_length
        self.quiet_window = quiet_window
        self.clock = clock

        self._sequence = 0
        self._last_text: str | None = None
        self._last_accepted_at: float | None = None

    def accept(self, event: InputEvent, now: float | None = None) -> QueryToken | None:
        """
        Apply the filter rules to one event.

        Args:
            event: Raw input event
            now: Arrival time in clock seconds, defaults to the current clock

        Returns:
            A new QueryToken, or None when the event is filtered out
        """
        try:
            kind = InputEventKind(event.kind)
        except ValueError:
            return None
        if kind not in COMMIT_KINDS:
            return None

        if not isinstance(event.text, str):
            return None
        text = event.text.strip()
        if len(text) < self.min_length:
            return None

        if text == self._last_text:
            return None

        now = self.clock() if now is None else now
        if (
            self._last_accepted_at is not None
            and now - self._last_accepted_at < self.quiet_window
        ):
            logger.debug(f"Throttled query '{text}' inside quiet window")
            return None

        self._sequence += 1
        self._last_text = text
        self._last_accepted_at = now
        return QueryToken(text=text, sequence=self._sequence)

    async def tokens(self, events: AsyncIterable[InputEvent]) -> AsyncIterator[QueryToken]:
        """Lazily yield a token for every accepted event of the stream."""
        async for event in events:
            token = self.accept(event)
            if token is not None:
                yield token

    def reset(self) -> None:
        """Forget the previous query and reopen the quiet window. Sequence numbers keep increasing."""
        self._last_text = None
        self._last_accepted_at = None
