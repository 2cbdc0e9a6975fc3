"""
Content type detection for decoded HTTP message bodies.

Detection is a heuristic cascade of regular expression tests evaluated in a
fixed priority order. The first test that matches decides the type.
"""

import re
from enum import Enum
from typing import Callable, Final, List, Tuple


class ContentType(Enum):
    """Display categories a body can be classified into."""

    XML = 'xml'
    HTML = 'html'
    JSON = 'json'
    JAVASCRIPT = 'javascript'
    CSS = 'css'
    PLAIN = 'plain'


XML_PATTERN: Final[re.Pattern] = re.compile(r'<\?xml.*?\?>', re.DOTALL)
HTML_PATTERN: Final[re.Pattern] = re.compile(r'<html', re.IGNORECASE)
JSON_PATTERN: Final[re.Pattern] = re.compile(r'^\s*[{\[]')
JS_PATTERN: Final[re.Pattern] = re.compile(
    r'function\s*\w*\s*\(|const\s+\w+|let\s+\w+|var\s+\w+'
)
CSS_PATTERN: Final[re.Pattern] = re.compile(r'[#.]?\w+\s*\{|@import|@media')


def _looks_like_json(text: str) -> bool:
    # Any colon plus any double quote is enough
    if JSON_PATTERN.search(text):
        return True

    return ':' in text and '"' in text


DETECTORS: Final[List[Tuple[Callable[[str], object], ContentType]]] = [
    (XML_PATTERN.search, ContentType.XML),
    (HTML_PATTERN.search, ContentType.HTML),
    (_looks_like_json, ContentType.JSON),
    (JS_PATTERN.search, ContentType.JAVASCRIPT),
    (CSS_PATTERN.search, ContentType.CSS),
]


def classify(text: str) -> ContentType:
    """
    Classify a decoded body.

    Args:
        text: The decoded body, possibly empty

    Returns:
        The first ContentType whose test matches, or PLAIN
    """

    if not text or not text.strip():
        return ContentType.PLAIN

    content = text.strip()

    for detector, content_type in DETECTORS:
        if detector(content):
            return content_type

    return ContentType.PLAIN
