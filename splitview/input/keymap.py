"""Key bindings for the split pane and a small dispatch table.

Navigation keys move the selection in split mode and scroll the detail
viewport in fullscreen mode; toggle/cancel/quit behave the same in both.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..split_pane import Mode, SplitPane


class KeyResult(Enum):
    IGNORED = "ignored"
    HANDLED = "handled"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyBinding:
    """One action reachable from one or more key tokens.

    ``label`` and ``help`` describe the binding for key help listings;
    ``fullscreen_help`` replaces ``help`` where the action differs in
    fullscreen mode.
    """

    keys: tuple[str, ...]
    label: str = ""
    help: str = ""
    fullscreen_help: str = ""

    def describe(self, mode: Mode) -> str:
        if mode is Mode.FULLSCREEN and self.fullscreen_help:
            return self.fullscreen_help
        return self.help


@dataclass(frozen=True)
class PaneKeyMap:
    toggle_fullscreen: KeyBinding = KeyBinding((" ", "ENTER"), "space/enter", "toggle fullscreen")
    exit_fullscreen: KeyBinding = KeyBinding(("ESC",), "esc", "exit fullscreen")
    quit: KeyBinding = KeyBinding(("q", "CTRL_C"), "q/ctrl+c", "quit")
    down: KeyBinding = KeyBinding(("j", "DOWN"), "j/down", "next row", "scroll down")
    up: KeyBinding = KeyBinding(("k", "UP"), "k/up", "previous row", "scroll up")
    page_down: KeyBinding = KeyBinding(("PAGE_DOWN", "CTRL_F"), "pgdn/ctrl+f", "page down")
    page_up: KeyBinding = KeyBinding(("PAGE_UP", "CTRL_B"), "pgup/ctrl+b", "page up")
    first: KeyBinding = KeyBinding(("g", "HOME"), "g/home", "first row", "scroll to top")
    last: KeyBinding = KeyBinding(("G", "END"), "G/end", "last row", "scroll to bottom")
    narrow_selector: KeyBinding = KeyBinding(("<",), "<", "narrow selector")
    widen_selector: KeyBinding = KeyBinding((">",), ">", "widen selector")

    def bindings(self, mode: Mode) -> list[KeyBinding]:
        """Bindings that do something in ``mode``, in help-listing order."""
        navigation = [self.down, self.up, self.page_down, self.page_up, self.first, self.last]
        if mode is Mode.FULLSCREEN:
            return [*navigation, self.exit_fullscreen, self.toggle_fullscreen, self.quit]
        return [*navigation, self.narrow_selector, self.widen_selector, self.toggle_fullscreen, self.quit]

    def help_lines(self, mode: Mode) -> list[str]:
        width = max(len(binding.label) for binding in self.bindings(mode)) + 2
        return [f"{binding.label:<{width}}{binding.describe(mode)}" for binding in self.bindings(mode)]


class KeyDispatcher:
    """Key-token → handler table; later bindings override earlier ones."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], KeyResult]] = {}

    def bind(self, binding: KeyBinding, handler: Callable[[], KeyResult | None]) -> KeyDispatcher:
        def run() -> KeyResult:
            result = handler()
            return KeyResult.HANDLED if result is None else result

        for key in binding.keys:
            self._handlers[key] = run
        return self

    def dispatch(self, key: str) -> KeyResult:
        handler = self._handlers.get(key)
        if handler is None:
            return KeyResult.IGNORED
        return handler()


class PaneKeyHandler:
    """Routes key tokens to :class:`SplitPane` operations by display mode."""

    def __init__(self, pane: SplitPane, keymap: PaneKeyMap | None = None) -> None:
        self.pane = pane
        self.keymap = keymap if keymap is not None else PaneKeyMap()
        self._split = self._common().bind(self.keymap.down, pane.select_next)
        self._split.bind(self.keymap.up, pane.select_previous)
        self._split.bind(self.keymap.page_down, pane.page_down)
        self._split.bind(self.keymap.page_up, pane.page_up)
        self._split.bind(self.keymap.first, pane.select_first)
        self._split.bind(self.keymap.last, pane.select_last)

        self._fullscreen = self._common().bind(self.keymap.down, lambda: pane.scroll_detail(1))
        self._fullscreen.bind(self.keymap.up, lambda: pane.scroll_detail(-1))
        self._fullscreen.bind(self.keymap.page_down, lambda: pane.scroll_detail_page(1))
        self._fullscreen.bind(self.keymap.page_up, lambda: pane.scroll_detail_page(-1))
        self._fullscreen.bind(self.keymap.first, pane.scroll_detail_to_top)
        self._fullscreen.bind(self.keymap.last, pane.scroll_detail_to_bottom)

    def _common(self) -> KeyDispatcher:
        dispatcher = KeyDispatcher()
        dispatcher.bind(self.keymap.toggle_fullscreen, self.pane.toggle_fullscreen)
        dispatcher.bind(self.keymap.quit, lambda: KeyResult.QUIT)
        dispatcher.bind(self.keymap.exit_fullscreen, self._exit_fullscreen)
        return dispatcher

    def _exit_fullscreen(self) -> KeyResult:
        return KeyResult.HANDLED if self.pane.exit_fullscreen() else KeyResult.IGNORED

    def handle(self, key: str) -> KeyResult:
        dispatcher = self._fullscreen if self.pane.mode is Mode.FULLSCREEN else self._split
        return dispatcher.dispatch(key)
