"""Terminal text shaping shared by the pane renderer and the highlighter."""

from __future__ import annotations

from .ansi import (
    ANSI_ESCAPE_RE,
    MIN_WRAP_WIDTH,
    OVERSIZE_PLACEHOLDER,
    ansi_display_width,
    clip_ansi_line,
    effective_wrap_width,
    pad_ansi_line,
    strip_ansi,
    wrap_ansi_line,
    wrap_ansi_text,
    wrap_hanging,
    wrap_indented,
)

__all__ = [
    "ANSI_ESCAPE_RE",
    "MIN_WRAP_WIDTH",
    "OVERSIZE_PLACEHOLDER",
    "ansi_display_width",
    "clip_ansi_line",
    "effective_wrap_width",
    "pad_ansi_line",
    "strip_ansi",
    "wrap_ansi_line",
    "wrap_ansi_text",
    "wrap_hanging",
    "wrap_indented",
]
