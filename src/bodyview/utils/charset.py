"""
Charset detection and decoding for raw body bytes.
"""

import codecs
import logging
from typing import Tuple

import chardet

from ..config import CHARSET_CONFIDENCE_THRESHOLD, DEFAULT_ENCODING

logger = logging.getLogger(__name__)


def detect_charset(data: bytes, threshold: float = CHARSET_CONFIDENCE_THRESHOLD) -> str:
    """
    Guess the charset of a byte string.

    Args:
        data: The raw bytes
        threshold: Minimum confidence (0.0 - 1.0) a guess must exceed

    Returns:
        The detected charset name, or UTF-8 when detection is not confident
    """

    if not data:
        return DEFAULT_ENCODING

    result = chardet.detect(data)
    encoding = result.get('encoding')
    confidence = result.get('confidence') or 0.0

    logger.debug("Detected charset %r with confidence %.2f", encoding, confidence)

    if not encoding or confidence <= threshold:
        return DEFAULT_ENCODING

    try:
        return codecs.lookup(encoding).name
    except LookupError:
        logger.warning("Unknown charset %r reported, using %s", encoding, DEFAULT_ENCODING)

    return DEFAULT_ENCODING


def decode_bytes(data: bytes, threshold: float = CHARSET_CONFIDENCE_THRESHOLD) -> Tuple[str, str]:
    """
    Decode raw bytes using the detected charset.

    Bytes that are malformed for the detected charset fall back to a lossy
    UTF-8 decode instead of failing.

    Args:
        data: The raw bytes
        threshold: Minimum detection confidence

    Returns:
        Tuple of (decoded text, charset name used)
    """

    if not data:
        return '', DEFAULT_ENCODING

    charset = detect_charset(data, threshold)

    try:
        return data.decode(charset), charset
    except UnicodeDecodeError as e:
        logger.warning("Decoding as %s failed (%s), falling back to %s", charset, e, DEFAULT_ENCODING)

    return data.decode(DEFAULT_ENCODING, errors='replace'), DEFAULT_ENCODING
