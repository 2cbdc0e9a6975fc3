"""
Incremental search over the displayed body text.
"""

import logging
import re
from typing import Callable, List, NamedTuple, Optional

from ..config import SEARCH_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], object]


class MatchSpan(NamedTuple):
    """A half-open [start, end) range of one search hit."""

    start: int
    end: int


def find_matches(text: str, query: str) -> List[MatchSpan]:
    """
    Find every case-insensitive occurrence of a literal query.

    The text is scanned once left to right, and scanning resumes after the
    end of each hit, so overlapping occurrences are not reported.

    Args:
        text: Text to search in
        query: Literal text to search for

    Returns:
        Matches ordered by start offset
    """

    if not query or not query.strip():
        return []

    pattern = re.compile(re.escape(query), re.IGNORECASE)

    return [MatchSpan(m.start(), m.end()) for m in pattern.finditer(text) if m.end() > m.start()]


class Debouncer:
    """
    Coalesces rapid calls into one callback after a quiet period.

    ``timer_factory(delay, callback)`` must return an object with ``start()``
    and ``cancel()`` that fires on the caller's event loop. Without a factory
    every trigger runs the callback immediately on the calling thread.
    """

    def __init__(self, delay: float, callback: Callable[[], None],
                 timer_factory: Optional[TimerFactory] = None) -> None:
        self.delay = delay
        self.callback = callback
        self.timer_factory = timer_factory
        self._timer = None

    def trigger(self) -> None:
        """Restart the quiet period."""

        self.cancel()

        if self.timer_factory is None:
            self.callback()
            return

        timer = self.timer_factory(self.delay, self._fire)
        self._timer = timer
        timer.start()

    def cancel(self) -> None:
        if self._timer is None:
            return

        self._timer.cancel()
        self._timer = None

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def _fire(self) -> None:
        self._timer = None
        self.callback()


class SearchIndex:
    """Ordered match list for a query plus a cyclic navigation cursor."""

    def __init__(self, text_source: Callable[[], str],
                 debounce: float = SEARCH_DEBOUNCE_SECONDS,
                 timer_factory: Optional[TimerFactory] = None) -> None:
        self.text_source = text_source
        self.query = ""
        self.matches: List[MatchSpan] = []
        self.cursor = -1

        self._pending_query = ""
        self._debouncer = Debouncer(debounce, self._run_pending_query, timer_factory)
        self._navigate_listeners: List[Callable[[MatchSpan], None]] = []
        self._rebuild_listeners: List[Callable[['SearchIndex'], None]] = []

    def add_navigate_listener(self, listener: Callable[[MatchSpan], None]) -> None:
        """Register a callback receiving the span selected by next()/previous()."""

        self._navigate_listeners.append(listener)

    def add_rebuild_listener(self, listener: Callable[['SearchIndex'], None]) -> None:
        """Register a callback fired after the match list is rebuilt."""

        self._rebuild_listeners.append(listener)

    def set_query(self, query: str) -> List[MatchSpan]:
        """
        Replace the query and recompute matches.

        Args:
            query: The literal search text

        Returns:
            The new match list
        """

        self.query = query or ""

        return self.rebuild()

    def rebuild(self) -> List[MatchSpan]:
        """Recompute matches for the current query over the current text."""

        self.matches = find_matches(self.text_source(), self.query)
        self.cursor = -1

        logger.debug("Search for %r found %d matches", self.query, len(self.matches))

        for listener in list(self._rebuild_listeners):
            listener(self)

        return self.matches

    def schedule_query(self, query: str) -> None:
        """Set the query after the debounce delay, superseding earlier calls."""

        self._pending_query = query or ""
        self._debouncer.trigger()

    def _run_pending_query(self) -> None:
        self.set_query(self._pending_query)

    def reset(self) -> None:
        """Forget the query and all matches."""

        self._debouncer.cancel()
        self._pending_query = ""
        self.query = ""
        self.matches = []
        self.cursor = -1

        for listener in list(self._rebuild_listeners):
            listener(self)

    def next(self) -> Optional[MatchSpan]:
        """Select the next match, wrapping from the last to the first."""

        if not self.matches:
            return None

        self.cursor = (self.cursor + 1) % len(self.matches)

        return self._select_current()

    def previous(self) -> Optional[MatchSpan]:
        """Select the previous match, wrapping from the first to the last."""

        if not self.matches:
            return None

        if self.cursor <= 0:
            self.cursor = len(self.matches) - 1
        else:
            self.cursor -= 1

        return self._select_current()

    def _select_current(self) -> MatchSpan:
        span = self.matches[self.cursor]

        for listener in list(self._navigate_listeners):
            listener(span)

        return span

    def current(self) -> Optional[MatchSpan]:
        """Get the selected match, if any."""

        if self.cursor < 0 or self.cursor >= len(self.matches):
            return None

        return self.matches[self.cursor]

    def status(self) -> str:
        """Get the status readout: 'N matches' or 'i/N' while navigating."""

        if self.cursor < 0 or not self.matches:
            return f"{len(self.matches)} matches"

        return f"{self.cursor + 1}/{len(self.matches)}"
