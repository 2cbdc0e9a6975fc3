"""
Core package for body classification, formatting and editing.

This package implements the body editor core. It includes the content
classifier and formatter, the display and raw buffers with the bridge that
keeps them synchronized, and the BodyEditor facade the host talks to.
"""

from .buffer import BufferChange, ByteBuffer, TextBuffer
from .classifier import ContentType, classify
from .editor import BodyEditor, EditorMode
from .formatter import FormattedResult, format_content, is_json_like
from .message import HttpMessage, MessageKind
from .sync import BufferSyncBridge

__all__ = [
    'BodyEditor',
    'BufferChange',
    'BufferSyncBridge',
    'ByteBuffer',
    'ContentType',
    'EditorMode',
    'FormattedResult',
    'HttpMessage',
    'MessageKind',
    'TextBuffer',
    'classify',
    'format_content',
    'is_json_like',
]
