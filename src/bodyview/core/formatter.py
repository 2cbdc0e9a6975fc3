"""
Reformatting of decoded bodies for display.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Final, Optional

from .classifier import ContentType
from ..config import JSON_INDENT

logger = logging.getLogger(__name__)

UNICODE_ESCAPE_PATTERN: Final[re.Pattern] = re.compile(r'\\u([0-9a-fA-F]{4})')
FORM_SEPARATOR: Final[str] = '&'


@dataclass(frozen=True)
class FormattedResult:
    """Display text plus whether a grammar-based reformat produced it."""

    text: str
    used_structural_format: bool


def is_json_like(text: str) -> bool:
    """Check for bracket-delimited text, or text containing both ':' and '"'."""

    if text is None:
        return False

    content = text.strip()

    if content.startswith('{') and content.endswith('}'):
        return True

    if content.startswith('[') and content.endswith(']'):
        return True

    return ':' in content and '"' in content


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {literal}")

    return value


def format_json(text: str, indent: int = JSON_INDENT) -> Optional[str]:
    """
    Pretty-print a JSON document.

    Object keys keep their original order and non-ASCII characters are
    written as-is.

    Args:
        text: The JSON text to reformat
        indent: Number of spaces per nesting level

    Returns:
        The indented document, or None if the text is not strict JSON or
        the result would not survive UTF-8 encoding
    """

    try:
        value = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, TypeError) as e:
        logger.debug("JSON formatting skipped: %s", e)
        return None

    formatted = json.dumps(value, indent=indent, ensure_ascii=False)

    # Escaped lone surrogates decode to unencodable code points
    try:
        formatted.encode('utf-8')
    except UnicodeEncodeError as e:
        logger.debug("JSON formatting skipped: %s", e)
        return None

    return formatted


def format_form_data(text: str) -> str:
    """Put every '&'-separated pair of a form body on its own line."""

    if FORM_SEPARATOR not in text:
        return text

    return text.replace(FORM_SEPARATOR, '\n' + FORM_SEPARATOR)


def format_content(text: str, content_type: ContentType,
                   indent: int = JSON_INDENT) -> FormattedResult:
    """
    Produce the display rendering of a body.

    JSON (by type or by shape) is pretty-printed. Anything else, or JSON that
    fails to parse, gets the form data line-break transform when it contains
    an '&', and is returned unchanged otherwise.

    Args:
        text: The decoded body
        content_type: The classification of the body
        indent: JSON indentation width

    Returns:
        FormattedResult with the text to display
    """

    if content_type is ContentType.JSON or is_json_like(text):
        formatted = format_json(text, indent)
        if formatted is not None:
            return FormattedResult(formatted, True)

    return FormattedResult(format_form_data(text), False)


def unescape_unicode(text: str) -> str:
    """
    Replace \\uXXXX escape sequences with the characters they encode.

    Sequences without four hex digits are left untouched. Escaped surrogate
    pairs are joined, and unpaired surrogates become U+FFFD.
    """

    if '\\u' not in text:
        return text

    unescaped = UNICODE_ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1), 16)), text)

    return unescaped.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'replace')
