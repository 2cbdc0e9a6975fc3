"""
Utility package for body decoding and search support functions.
"""

from .charset import decode_bytes, detect_charset
from .search import Debouncer, MatchSpan, SearchIndex, find_matches

__all__ = [
    'decode_bytes',
    'detect_charset',
    'Debouncer',
    'MatchSpan',
    'SearchIndex',
    'find_matches',
]
