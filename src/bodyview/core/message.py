"""
Minimal HTTP message model handed to body editors by the host.
"""

from dataclasses import dataclass, replace
from enum import Enum


class MessageKind(Enum):
    REQUEST = 'request'
    RESPONSE = 'response'


@dataclass(frozen=True)
class HttpMessage:
    """The body of an HTTP request or response."""
    body: bytes = b''
    kind: MessageKind = MessageKind.REQUEST

    def has_body(self) -> bool:
        return bool(self.body)

    def with_body(self, body: bytes) -> 'HttpMessage':
        """Return a copy of the message carrying a different body."""

        return replace(self, body=bytes(body))
