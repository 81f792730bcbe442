"""Selector list + detail viewport with per-row code caching."""

from __future__ import annotations

from .model import ColumnConfig, Mode, Row, parse_columns
from .pane import CacheEntry, SplitPane, ViewState

__all__ = [
    "CacheEntry",
    "ColumnConfig",
    "Mode",
    "Row",
    "SplitPane",
    "ViewState",
    "parse_columns",
]
