"""
Syntax tokenizing for classified bodies using Pygments.
"""

from typing import Any, Dict, Final, List, NamedTuple, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers.css import CssLexer
from pygments.lexers.data import JsonLexer
from pygments.lexers.html import HtmlLexer, XmlLexer
from pygments.lexers.javascript import JavascriptLexer
from pygments.lexers.special import TextLexer
from pygments.token import Token

from .classifier import ContentType

LEXERS: Final[Dict[ContentType, type]] = {
    ContentType.XML: XmlLexer,
    ContentType.HTML: HtmlLexer,
    ContentType.JSON: JsonLexer,
    ContentType.JAVASCRIPT: JavascriptLexer,
    ContentType.CSS: CssLexer,
    ContentType.PLAIN: TextLexer,
}

TOKEN_CATEGORY_MAP: Final[Dict[Any, str]] = {
    Token.Keyword: 'keyword',
    Token.Keyword.Constant: 'keyword',
    Token.Keyword.Declaration: 'keyword',
    Token.Keyword.Reserved: 'keyword',

    Token.Name: 'name',
    Token.Name.Tag: 'name',
    Token.Name.Attribute: 'name',
    Token.Name.Function: 'name',
    Token.Name.Class: 'name',

    Token.String: 'string',
    Token.String.Double: 'string',
    Token.String.Single: 'string',

    Token.Comment: 'comment',
    Token.Comment.Preproc: 'comment',

    Token.Number: 'number',

    Token.Operator: 'operator',

    Token.Punctuation: 'punctuation',

    Token.Text: 'default',
    Token.Text.Whitespace: 'default',
}


class SyntaxSpan(NamedTuple):
    """A run of text sharing one syntax category."""

    start: int
    end: int
    category: str


class SyntaxHighlighter:
    """Tokenizes text with the Pygments lexer matching a content type."""

    def __init__(self, content_type: ContentType = ContentType.PLAIN) -> None:
        self.content_type = content_type
        self.lexer: Lexer = self._make_lexer(content_type)

    @staticmethod
    def _make_lexer(content_type: ContentType) -> Lexer:
        lexer_class = LEXERS.get(content_type, TextLexer)

        # Keep offsets aligned with the buffer text
        return lexer_class(stripnl=False, stripall=False, ensurenl=False)

    def set_content_type(self, content_type: ContentType) -> None:
        """Switch to the lexer for another content type."""

        if content_type is self.content_type:
            return

        self.content_type = content_type
        self.lexer = self._make_lexer(content_type)

    def get_language_name(self) -> str:
        """Get the display name of the active lexer."""

        return self.lexer.name

    def tokenize(self, text: str) -> List[SyntaxSpan]:
        """
        Split text into categorized spans.

        Adjacent tokens of the same category are merged.

        Args:
            text: The text to tokenize

        Returns:
            Spans covering the whole text, in order
        """

        if not text:
            return []

        spans: List[SyntaxSpan] = []

        for index, token_type, value in self.lexer.get_tokens_unprocessed(text):
            if not value:
                continue

            category = self._get_token_category(token_type)
            end = index + len(value)

            if spans and spans[-1].category == category and spans[-1].end == index:
                spans[-1] = SyntaxSpan(spans[-1].start, end, category)
                continue

            spans.append(SyntaxSpan(index, end, category))

        return spans

    def _get_token_category(self, token_type: Any) -> str:
        """
        Get the category for a token type.

        Args:
            token_type: The Pygments token type

        Returns:
            The category name, falling back through parent token types
        """

        if token_type in TOKEN_CATEGORY_MAP:
            return TOKEN_CATEGORY_MAP[token_type]

        while token_type.parent:
            token_type = token_type.parent
            if token_type in TOKEN_CATEGORY_MAP:
                return TOKEN_CATEGORY_MAP[token_type]

        return 'default'

    def render_terminal(self, text: str, background: Optional[str] = None) -> str:
        """Render text with ANSI colors for a "light" or "dark" terminal."""

        formatter = TerminalFormatter(bg=background) if background else TerminalFormatter()

        return highlight(text, self.lexer, formatter)
