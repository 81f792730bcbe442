"""Input-layer public API for key decoding and pane key handling."""

from .keymap import KeyBinding, KeyDispatcher, KeyResult, PaneKeyHandler, PaneKeyMap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyDispatcher",
    "KeyResult",
    "PaneKeyHandler",
    "PaneKeyMap",
    "read_key",
]
