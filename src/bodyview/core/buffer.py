"""
Buffer module for the editable display text and the raw message bytes.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


@dataclass(frozen=True)
class BufferChange:
    """Describes one edit applied to a TextBuffer."""
    action_type: str
    position: int
    length: int


ChangeListener = Callable[[BufferChange], None]
CursorListener = Callable[[int], None]


class TextBuffer:
    """Displayed text of a message body with cursor and selection."""

    def __init__(self, text: str = '') -> None:
        self._text = text
        self.cursor_pos = 0
        self.selection_start: Optional[int] = None
        self.selection_end: Optional[int] = None
        self._change_listeners: List[ChangeListener] = []
        self._cursor_listeners: List[CursorListener] = []

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Register a callback fired after every content change."""

        self._change_listeners.append(listener)

    def add_cursor_listener(self, listener: CursorListener) -> None:
        """Register a callback fired whenever the cursor moves."""

        self._cursor_listeners.append(listener)

    def _fire_change(self, action_type: str, position: int, length: int) -> None:
        change = BufferChange(action_type, position, length)
        for listener in list(self._change_listeners):
            listener(change)

    def _clamp(self, position: int) -> int:
        return max(0, min(position, len(self._text)))

    def set_cursor(self, position: int) -> int:
        """
        Move the cursor, clamping out-of-range positions into the text.

        Args:
            position: Requested offset

        Returns:
            The offset the cursor ended up at
        """

        self.cursor_pos = self._clamp(position)

        for listener in list(self._cursor_listeners):
            listener(self.cursor_pos)

        return self.cursor_pos

    def set_text(self, text: str) -> None:
        """
        Replace the whole content.

        Fires a 'remove' change for the old content and an 'insert' change
        for the new one, then leaves the cursor at the end of the text.
        """

        old_length = len(self._text)
        self.selection_start = None
        self.selection_end = None

        self._text = ''
        if old_length:
            self._fire_change('remove', 0, old_length)

        self._text = text
        if text:
            self._fire_change('insert', 0, len(text))

        self.set_cursor(len(text))

    def insert(self, position: int, text: str) -> None:
        """Insert text at the specified position."""

        if not text:
            return

        position = self._clamp(position)
        self._text = self._text[:position] + text + self._text[position:]

        self._fire_change('insert', position, len(text))
        self.set_cursor(position + len(text))

    def delete(self, start: int, end: int) -> None:
        """Delete text in the range [start, end)."""

        start, end = self._clamp(min(start, end)), self._clamp(max(start, end))
        if start == end:
            return

        self._text = self._text[:start] + self._text[end:]

        self._fire_change('remove', start, end - start)
        self.set_cursor(start)

    def replace(self, start: int, end: int, text: str) -> None:
        """Replace the range [start, end) with text."""

        self.delete(start, end)
        self.insert(min(start, end), text)

    def select(self, start: int, end: int) -> None:
        """Select a range and move the cursor to its end."""

        self.selection_start = self._clamp(start)
        self.selection_end = self._clamp(end)
        self.set_cursor(self.selection_end)

    def get_selection(self) -> Optional[Tuple[int, int]]:
        """Get the current selection range, or None when nothing is selected."""

        if self.selection_start is None or self.selection_end is None:
            return None

        if self.selection_start == self.selection_end:
            return None

        return (min(self.selection_start, self.selection_end),
                max(self.selection_start, self.selection_end))


class ByteBuffer:
    """Raw body bytes as held by the host's message editor."""

    def __init__(self, initial_data: bytes = b'', editable: bool = True) -> None:
        self.data = bytearray(initial_data)
        self.editable = editable

    def get_contents(self) -> bytes:
        return bytes(self.data)

    def set_contents(self, data: bytes) -> None:
        """Replace the stored bytes."""

        self.data = bytearray(data or b'')

    def get_size(self) -> int:
        """Get the size of the buffer in bytes."""

        return len(self.data)
