"""Cadence tokenizer and terminal syntax highlighting."""

from __future__ import annotations

from .cadence import CADENCE_RULES, COMMENT_STATE
from .highlighting import (
    DEFAULT_STYLE,
    available_style_names,
    format_tokens,
    highlight_and_wrap,
    highlight_code,
    normalize_style,
    sanitize_terminal_text,
    wrap_without_highlight,
)
from .lexer import Pop, Push, Rule, ScanResult, Token, build_table, rule, scan, tokenize

__all__ = [
    "CADENCE_RULES",
    "COMMENT_STATE",
    "DEFAULT_STYLE",
    "Pop",
    "Push",
    "Rule",
    "ScanResult",
    "Token",
    "available_style_names",
    "build_table",
    "format_tokens",
    "highlight_and_wrap",
    "highlight_code",
    "normalize_style",
    "rule",
    "sanitize_terminal_text",
    "scan",
    "tokenize",
    "wrap_without_highlight",
]
