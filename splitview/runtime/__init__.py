"""Interactive runtime: terminal control, row feed, config, and event loop."""

from __future__ import annotations

from .feed import AppendRows, ReplaceRows, RowFeed, UpdateRow, apply_message, decode_message, decode_row
from .loop import RuntimeLoopHooks, RuntimeLoopTiming, run_main_loop

__all__ = [
    "AppendRows",
    "ReplaceRows",
    "RowFeed",
    "RuntimeLoopHooks",
    "RuntimeLoopTiming",
    "UpdateRow",
    "apply_message",
    "decode_message",
    "decode_row",
    "run_main_loop",
]
