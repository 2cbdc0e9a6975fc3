"""
Two-way synchronization between the display text and the raw body bytes.

Programmatic replacements of the display text run inside ``suppressed()``.
While that scope is active the bridge ignores the change notifications the
display buffer fires, so installing content never echoes back into the raw
buffer and a raw write never re-enters the display.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from .buffer import BufferChange, ByteBuffer, TextBuffer
from .classifier import ContentType, classify
from .formatter import FormattedResult, format_content
from ..config import DEFAULT_ENCODING, JSON_INDENT

logger = logging.getLogger(__name__)


class BufferSyncBridge:
    """Keeps a TextBuffer and a ByteBuffer in step without update cycles."""

    def __init__(self, display: TextBuffer, raw: ByteBuffer,
                 encoding: str = DEFAULT_ENCODING, json_indent: int = JSON_INDENT) -> None:
        self.display = display
        self.raw = raw
        self.encoding = encoding
        self.json_indent = json_indent

        self.syncing = False
        self.last_known_cursor = 0
        self.content_type = ContentType.PLAIN
        self.dropped_echoes = 0

        display.add_cursor_listener(self._on_cursor_moved)
        if raw.editable:
            display.add_change_listener(self._on_display_changed)

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """Mark a programmatic update; the flag is restored on every exit path."""

        previous = self.syncing
        self.syncing = True
        try:
            yield
        finally:
            self.syncing = previous

    def _on_cursor_moved(self, position: int) -> None:
        if not self.syncing:
            self.last_known_cursor = position

    def _on_display_changed(self, change: BufferChange) -> None:
        if self.syncing:
            self.dropped_echoes += 1
            logger.debug("Ignoring %s echo at %d during sync", change.action_type, change.position)
            return

        self.push_to_raw()

    def _restore_cursor(self) -> int:
        target = min(max(self.last_known_cursor, 0), len(self.display))

        return self.display.set_cursor(target)

    def install(self, text: str) -> int:
        """
        Replace the display text as-is.

        Args:
            text: The new content

        Returns:
            The cursor offset after restoring the last user position
        """

        with self.suppressed():
            self.display.set_text(text)
            return self._restore_cursor()

    def load_text(self, text: Optional[str]) -> Optional[FormattedResult]:
        """
        Install a freshly decoded body as the authoritative content.

        The body is classified and formatted, shown in the display buffer and
        written to the raw buffer. The text is encoded before either buffer
        changes, so an encoding failure leaves both untouched. Empty or
        missing bodies clear both buffers without any formatting attempt.

        Args:
            text: The decoded body, or None

        Returns:
            The FormattedResult that was installed, or None for empty bodies
        """

        if not text:
            with self.suppressed():
                self.content_type = ContentType.PLAIN
                self.display.set_text('')
                self.raw.set_contents(b'')

            return None

        content_type = classify(text)
        result = format_content(text, content_type, self.json_indent)
        data = result.text.encode(self.encoding)

        with self.suppressed():
            self.content_type = content_type
            self.display.set_text(result.text)
            self._restore_cursor()
            self.raw.set_contents(data)

        logger.debug("Installed %d chars as %s (structural=%s)",
                     len(result.text), self.content_type.value, result.used_structural_format)

        return result

    def push_to_raw(self) -> None:
        """Write the current display text into the raw buffer."""

        if not self.raw.editable:
            return

        with self.suppressed():
            self.raw.set_contents(self.display.text.encode(self.encoding))

        logger.debug("Pushed %d bytes to the raw buffer", self.raw.get_size())

    def pull_from_raw(self) -> None:
        """Show the raw buffer's bytes in the display, re-classifying them."""

        text = self.raw.get_contents().decode(self.encoding, errors='replace')

        with self.suppressed():
            self.content_type = classify(text)
            self.display.set_text(text)
            self._restore_cursor()

    @property
    def is_syncing(self) -> bool:
        return self.syncing
