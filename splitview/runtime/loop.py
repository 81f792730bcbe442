"""Main interactive event loop for the terminal UI.

Single-threaded: each iteration integrates queued feed messages, handles
resizes, paints when something changed, then waits briefly for one key.
Terminal access is injected so the loop can be driven from tests.
"""

from __future__ import annotations

import os
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyResult, PaneKeyHandler, read_key
from ..split_pane import SplitPane
from .feed import RowFeed, apply_message

SPLIT_STEP_PERCENT = 0.02


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120
    spinner_frame_seconds: float = 0.12


@dataclass(frozen=True)
class RuntimeLoopHooks:
    """Terminal-facing operations used by ``run_main_loop``."""

    read_key: Callable[[int, int | None], str] = read_key
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size
    monotonic: Callable[[], float] = time.monotonic
    save_left_pane_percent: Callable[[int, int], None] | None = None


def run_main_loop(
    pane: SplitPane,
    terminal,
    stdin_fd: int,
    feed: RowFeed | None = None,
    *,
    timing: RuntimeLoopTiming | None = None,
    hooks: RuntimeLoopHooks | None = None,
    keys: PaneKeyHandler | None = None,
) -> None:
    """Run the interactive TUI loop until a quit key arrives."""
    timing = timing if timing is not None else RuntimeLoopTiming()
    hooks = hooks if hooks is not None else RuntimeLoopHooks()
    keys = keys if keys is not None else PaneKeyHandler(pane)
    dirty = True
    spinner_frame = -1

    def adjust_split(step: float) -> None:
        """Resize the selector column and persist the new percentage."""
        pane.set_split_percent(pane.split_percent + step)
        width, _height = pane.size
        if hooks.save_left_pane_percent is not None:
            hooks.save_left_pane_percent(width, pane.selector_width())

    with terminal.raw_mode():
        while True:
            term = hooks.get_terminal_size((80, 24))
            if (term.columns, term.lines) != pane.size:
                pane.resize(term.columns, term.lines)
                dirty = True

            if feed is not None:
                for message in feed.drain():
                    apply_message(pane, message)
                    dirty = True

            if pane.row_count == 0:
                next_frame = int(hooks.monotonic() / timing.spinner_frame_seconds)
                if next_frame != spinner_frame:
                    spinner_frame = next_frame
                    pane.tick()
                    dirty = True

            if dirty:
                terminal.write_frame(pane.render())
                dirty = False

            try:
                key = hooks.read_key(stdin_fd, timing.key_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue

            if key in keys.keymap.narrow_selector.keys:
                adjust_split(-SPLIT_STEP_PERCENT)
                dirty = True
                continue
            if key in keys.keymap.widen_selector.keys:
                adjust_split(SPLIT_STEP_PERCENT)
                dirty = True
                continue

            result = keys.handle(key)
            if result is KeyResult.QUIT:
                break
            if result is KeyResult.HANDLED:
                dirty = True
