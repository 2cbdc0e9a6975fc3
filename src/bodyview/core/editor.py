"""
Body editor facade exposed to the host proxy tool.

One BodyEditor backs one editor tab. The host hands it messages with
``set_message``, wires its widgets to ``on_buffer_changed`` /
``on_query_changed`` and forwards search field edits and navigation
requests to ``query_changed``, ``search_next`` and ``search_previous``.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .buffer import BufferChange, ByteBuffer, TextBuffer
from .classifier import ContentType
from .formatter import FormattedResult, unescape_unicode
from .message import HttpMessage
from .sync import BufferSyncBridge
from .syntax import SyntaxHighlighter, SyntaxSpan
from ..config import ERROR_PLACEHOLDER, EditorSettings
from ..utils.charset import decode_bytes
from ..utils.search import MatchSpan, SearchIndex, TimerFactory

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    EDITABLE = 'editable'
    READ_ONLY = 'read_only'


class BodyEditor:
    """Displays, reformats and searches the body of one HTTP message."""

    def __init__(self, mode: EditorMode = EditorMode.EDITABLE,
                 settings: Optional[EditorSettings] = None,
                 timer_factory: Optional[TimerFactory] = None) -> None:
        self.mode = EditorMode(mode)
        self.settings = settings or EditorSettings()

        self.display = TextBuffer()
        self.raw = ByteBuffer(editable=self.editable)
        self.bridge = BufferSyncBridge(
            self.display,
            self.raw,
            encoding=self.settings.encoding,
            json_indent=self.settings.json_indent,
        )
        self.search = SearchIndex(
            lambda: self.display.text,
            debounce=self.settings.search_debounce,
            timer_factory=timer_factory,
        )
        self.highlighter = SyntaxHighlighter()

        self.message: Optional[HttpMessage] = None
        self.original_text: Optional[str] = None
        self.charset = self.settings.encoding
        self.formatted: Optional[FormattedResult] = None

        self._buffer_listeners: List[Callable[[BufferChange], None]] = []
        self._query_listeners: List[Callable[[str], None]] = []

        self.display.add_change_listener(self._on_display_changed)
        self.search.add_navigate_listener(self._on_match_selected)

    @property
    def editable(self) -> bool:
        return self.mode is EditorMode.EDITABLE

    @property
    def content_type(self) -> ContentType:
        return self.bridge.content_type

    def on_buffer_changed(self, callback: Callable[[BufferChange], None]) -> None:
        """Subscribe to user edits and wholesale content replacements."""

        self._buffer_listeners.append(callback)

    def on_query_changed(self, callback: Callable[[str], None]) -> None:
        """Subscribe to search query changes, including resets to ''."""

        self._query_listeners.append(callback)

    def _notify_buffer(self, change: BufferChange) -> None:
        for listener in list(self._buffer_listeners):
            listener(change)

    def _notify_query(self, query: str) -> None:
        for listener in list(self._query_listeners):
            listener(query)

    def _on_display_changed(self, change: BufferChange) -> None:
        if self.bridge.is_syncing:
            return

        self._notify_buffer(change)

    def _on_match_selected(self, span: MatchSpan) -> None:
        self.display.select(span.start, span.end)

    def is_applicable_for(self, message: Optional[HttpMessage]) -> bool:
        """Check whether the message has a body worth showing."""

        return message is not None and message.has_body()

    def display_label(self) -> str:
        return self.settings.display_label

    def set_message(self, message: Optional[HttpMessage]) -> None:
        """
        Show a new message.

        The body is decoded, reformatted and installed without echoing into
        the raw buffer. Any previous search is discarded. Failures while
        processing the body are logged and replaced by a placeholder text.
        The raw buffer then holds the unprocessed body and get_message()
        returns the message unchanged.

        Args:
            message: The message to display, or None
        """

        self.message = message
        self.formatted = None

        try:
            body = message.body if message is not None else b''
            text, self.charset = decode_bytes(body, self.settings.confidence_threshold)
            self.original_text = text

            if not self.editable and self.settings.unescape_read_only:
                text = unescape_unicode(text)

            self.formatted = self.bridge.load_text(text)
        except Exception as e:
            logger.exception("Failed to process message body")
            self.original_text = None
            self.bridge.content_type = ContentType.PLAIN
            self.bridge.install(ERROR_PLACEHOLDER.format(reason=e))
            self.raw.set_contents(message.body if message is not None else b'')

        self.highlighter.set_content_type(self.content_type)
        logger.debug("Showing %s body with the %s lexer",
                     self.charset, self.highlighter.get_language_name())

        self.search.reset()
        self._notify_query("")
        self._notify_buffer(BufferChange('replace', 0, len(self.display)))

    def refresh_from_raw(self) -> None:
        """Reload the display from the raw buffer's current bytes."""

        self.bridge.pull_from_raw()
        self.highlighter.set_content_type(self.content_type)

        self.search.reset()
        self._notify_query("")
        self._notify_buffer(BufferChange('replace', 0, len(self.display)))

    def is_modified(self) -> bool:
        """Check whether the displayed text differs from the decoded body."""

        if not self.editable or self.original_text is None:
            return False

        return self.display.text != self.original_text

    def current_outgoing_body(self) -> bytes:
        """Get the displayed text encoded for sending upstream."""

        return self.display.text.encode(self.settings.encoding)

    def get_message(self) -> Optional[HttpMessage]:
        """Get the message carrying the edited body, if there is text to send."""

        if self.message is None:
            return None

        if not self.editable or self.original_text is None or not self.display.text:
            return self.message

        return self.message.with_body(self.current_outgoing_body())

    def selected_data(self) -> Optional[Tuple[int, int]]:
        return self.display.get_selection()

    def syntax_spans(self) -> List[SyntaxSpan]:
        """Tokenize the displayed text with the lexer for its content type."""

        return self.highlighter.tokenize(self.display.text)

    def query_changed(self, query: str) -> None:
        """Handle a search field edit; matches are rebuilt after the debounce delay."""

        self._notify_query(query)
        self.search.schedule_query(query)

    def search_next(self) -> Optional[MatchSpan]:
        return self.search.next()

    def search_previous(self) -> Optional[MatchSpan]:
        return self.search.previous()

    def search_status(self) -> str:
        return self.search.status()
