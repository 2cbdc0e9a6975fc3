"""
Content-aware viewer and editor core for HTTP message bodies.
"""

from .config import EditorSettings
from .core import BodyEditor, ContentType, EditorMode, HttpMessage, MessageKind

__version__ = "0.1.0"

__all__ = [
    'BodyEditor',
    'ContentType',
    'EditorMode',
    'EditorSettings',
    'HttpMessage',
    'MessageKind',
]
