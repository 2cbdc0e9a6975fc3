"""
Settings for body editor instances.
"""

import os
from dataclasses import dataclass, replace
from typing import Final, Optional

DISPLAY_LABEL: Final[str] = "Body"
DEFAULT_ENCODING: Final[str] = "utf-8"
CHARSET_CONFIDENCE_THRESHOLD: Final[float] = 0.5
JSON_INDENT: Final[int] = 2
SEARCH_DEBOUNCE_SECONDS: Final[float] = 0.3
ERROR_PLACEHOLDER: Final[str] = "Error processing body: {reason}"

DEBOUNCE_ENV_VAR: Final[str] = "BODYVIEW_SEARCH_DEBOUNCE"


@dataclass(frozen=True)
class EditorSettings:
    """Tunables shared by the formatter, the search index and the editor."""

    display_label: str = DISPLAY_LABEL
    encoding: str = DEFAULT_ENCODING
    confidence_threshold: float = CHARSET_CONFIDENCE_THRESHOLD
    json_indent: int = JSON_INDENT
    search_debounce: float = SEARCH_DEBOUNCE_SECONDS
    unescape_read_only: bool = True

    def with_overrides(self, **changes) -> 'EditorSettings':
        """Return a copy with the given fields replaced, ignoring None values."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_settings(search_debounce: Optional[float] = None) -> EditorSettings:
    """
    Build settings from defaults and the environment.

    An explicit argument wins over the BODYVIEW_SEARCH_DEBOUNCE variable.
    Unparseable or negative environment values are ignored.

    Args:
        search_debounce: Optional debounce delay in seconds

    Returns:
        The resulting EditorSettings
    """

    settings = EditorSettings()

    if search_debounce is None:
        raw = os.environ.get(DEBOUNCE_ENV_VAR, "")
        try:
            value = float(raw) if raw else None
        except ValueError:
            value = None

        if value is not None and value >= 0:
            search_debounce = value

    return settings.with_overrides(search_debounce=search_debounce)
