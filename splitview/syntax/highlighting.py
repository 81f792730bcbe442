"""Syntax styling for Cadence source shown in the detail pane.

Tokens come from the rule-table lexer and are styled with Pygments'
256-colour terminal formatter. Highlighting is cosmetic: every failure
path returns the input text unstyled.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Iterable

from pygments.formatters import Terminal256Formatter
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from ..errors import TokenizeError
from ..render.ansi import wrap_ansi_text
from .cadence import CADENCE_RULES
from .lexer import RuleTable, Token, tokenize

log = logging.getLogger(__name__)

DEFAULT_STYLE = "solarized-dark"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def available_style_names() -> tuple[str, ...]:
    return tuple(sorted(get_all_styles()))


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else :data:`DEFAULT_STYLE`."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        log.debug("unknown syntax style %r, using %r", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    """Return cached terminal formatter for an already-normalized style."""
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def format_tokens(tokens: Iterable[Token], style: str | None = DEFAULT_STYLE) -> str:
    """Render tokens as ANSI-styled text.

    Token kinds the style does not mention inherit their parent kind's style,
    or stay unstyled. Stripping the escapes yields the token text verbatim.
    """
    token_list = list(tokens)
    formatter = _formatter_for_style(normalize_style(style))
    buf = io.StringIO()
    try:
        formatter.format(((token.kind, token.text) for token in token_list), buf)
    except Exception:
        log.debug("formatter failed for style %r", style, exc_info=True)
        return "".join(token.text for token in token_list)
    return buf.getvalue()


def highlight_code(source: str, style: str | None = DEFAULT_STYLE, table: RuleTable = CADENCE_RULES) -> str:
    """Tokenize and style ``source``; unmatched input comes back unstyled."""
    if not source:
        return source
    try:
        tokens = tokenize(source, table)
    except TokenizeError as exc:
        log.debug("highlighting skipped: %s", exc)
        return source
    return format_tokens(tokens, style)


def highlight_and_wrap(source: str, style: str | None, width: int) -> list[str]:
    """Full detail-pane pipeline: sanitize, highlight, then wrap to ``width``."""
    if not source:
        return []
    return wrap_ansi_text(highlight_code(sanitize_terminal_text(source), style), width)


def wrap_without_highlight(source: str, style: str | None, width: int) -> list[str]:
    """Pipeline variant for ``--no-color``: same wrapping, no styling."""
    del style
    if not source:
        return []
    return wrap_ansi_text(sanitize_terminal_text(source), width)
