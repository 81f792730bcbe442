"""Split-pane model: selector list beside a detail viewport.

Owns rows, selection, display mode, and the per-(row, mode) cache of
highlighted and wrapped code. Cache keys are list positions, so only
appends may keep existing entries; :meth:`SplitPane.replace_rows` is the
only way to reorder and it clears everything.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from ..render.ansi import effective_wrap_width, wrap_hanging
from ..syntax.highlighting import DEFAULT_STYLE, highlight_and_wrap
from ..ui_theme import DEFAULT_THEME, UITheme
from .model import ColumnConfig, Mode, Row
from .rendering import (
    join_columns,
    render_centered,
    render_loading,
    render_selector,
    render_viewport,
    selector_rows,
)

Highlighter = Callable[..., list[str]]

DEFAULT_SPLIT_PERCENT = 0.3
MIN_SPLIT_PERCENT = 0.05
MAX_SPLIT_PERCENT = 0.95
DETAIL_PADDING = 1
NO_SELECTION_TEXT = "No item selected"


@dataclass(frozen=True)
class CacheEntry:
    """Highlighted code lines for one row in one mode.

    Valid while the row's raw code and the wrap width still match.
    """

    code: str
    width: int
    lines: tuple[str, ...]

    def matches(self, code: str, width: int) -> bool:
        return self.code == code and self.width == width


@dataclass
class ViewState:
    mode: Mode = Mode.SPLIT
    selected: int = 0
    selector_start: int = 0
    detail_start: int = 0
    width: int = 0
    height: int = 0
    spinner_frame: int = 0
    last_width: dict[Mode, int] = field(default_factory=dict)


def clamp_split_percent(percent: float) -> float:
    return max(MIN_SPLIT_PERCENT, min(MAX_SPLIT_PERCENT, float(percent)))


class SplitPane:
    """Selector + detail layout with lazily cached code rendering."""

    def __init__(
        self,
        columns: Sequence[ColumnConfig],
        *,
        rows: Iterable[Row] = (),
        style: str | None = DEFAULT_STYLE,
        ui_theme: UITheme = DEFAULT_THEME,
        split_percent: float = DEFAULT_SPLIT_PERCENT,
        highlighter: Highlighter = highlight_and_wrap,
    ) -> None:
        self.columns: tuple[ColumnConfig, ...] = tuple(columns)
        self.style = style
        self.ui_theme = ui_theme
        self.split_percent = clamp_split_percent(split_percent)
        self.view = ViewState()
        self._highlighter = highlighter
        self._rows: list[Row] = list(rows)
        self._caches: dict[Mode, dict[int, CacheEntry]] = {Mode.SPLIT: {}, Mode.FULLSCREEN: {}}
        self._detail_key: tuple[int, Mode, int, Row | None] | None = None
        self._detail_lines: list[str] = []

    # -- introspection -------------------------------------------------

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def mode(self) -> Mode:
        return self.view.mode

    @property
    def selected_index(self) -> int:
        return self.view.selected

    @property
    def size(self) -> tuple[int, int]:
        return self.view.width, self.view.height

    def selected_row(self) -> Row | None:
        if 0 <= self.view.selected < len(self._rows):
            return self._rows[self.view.selected]
        return None

    def cache_keys(self) -> set[tuple[int, Mode]]:
        return {(index, mode) for mode, cache in self._caches.items() for index in cache}

    def cache_entry(self, index: int, mode: Mode) -> CacheEntry | None:
        return self._caches[mode].get(index)

    def detail_lines(self) -> list[str]:
        """Detail content for the current selection and mode, refreshed if stale."""
        self._refresh_detail()
        return list(self._detail_lines)

    # -- geometry ------------------------------------------------------

    def selector_width(self) -> int:
        width = self.view.width
        if width < 3:
            return 0
        return min(max(1, int(width * self.split_percent)), width - 2)

    def viewport_width(self, mode: Mode | None = None) -> int:
        mode = self.view.mode if mode is None else mode
        if mode is Mode.FULLSCREEN or self.selector_width() == 0:
            return max(0, self.view.width)
        return self.view.width - self.selector_width() - 1

    def _padding(self, mode: Mode) -> tuple[int, int]:
        if mode is Mode.FULLSCREEN or self.selector_width() == 0:
            return DETAIL_PADDING, DETAIL_PADDING
        return DETAIL_PADDING, 0

    def content_width(self, mode: Mode | None = None) -> int:
        mode = self.view.mode if mode is None else mode
        pad_left, pad_right = self._padding(mode)
        return max(1, self.viewport_width(mode) - pad_left - pad_right)

    def code_wrap_width(self, mode: Mode | None = None) -> int:
        return effective_wrap_width(self.content_width(mode))

    def _selector_page(self) -> int:
        return max(1, selector_rows(self.view.height))

    def _detail_page(self) -> int:
        return max(1, self.view.height)

    # -- row mutations -------------------------------------------------

    def replace_rows(self, rows: Iterable[Row]) -> None:
        """Swap in a new row list; both caches and the selection reset."""
        self._rows = list(rows)
        self._caches = {Mode.SPLIT: {}, Mode.FULLSCREEN: {}}
        self.view.selected = 0
        self.view.selector_start = 0
        self.view.detail_start = 0
        self._detail_key = None

    def append_row(self, row: Row) -> None:
        self._rows.append(row)

    def append_rows(self, rows: Iterable[Row]) -> None:
        self._rows.extend(rows)

    def update_row(self, index: int, row: Row) -> None:
        """Replace one row and drop its cached code in both modes.

        Out-of-range indexes are ignored: a feed update may race with local
        navigation or a replace.
        """
        if index < 0 or index >= len(self._rows):
            return
        self._rows[index] = row
        for cache in self._caches.values():
            cache.pop(index, None)
        if index == self.view.selected:
            self._detail_key = None

    # -- selection -----------------------------------------------------

    def set_selection(self, index: int, *, wrap: bool = False) -> None:
        """Select ``index``, clamped into range or wrapped around when ``wrap``."""
        count = len(self._rows)
        if count == 0:
            return
        index = index % count if wrap else max(0, min(index, count - 1))
        if index == self.view.selected:
            return
        self.view.selected = index
        self.view.detail_start = 0
        self._ensure_selection_visible()

    def select_next(self, *, wrap: bool = False) -> None:
        self.set_selection(self.view.selected + 1, wrap=wrap)

    def select_previous(self, *, wrap: bool = False) -> None:
        self.set_selection(self.view.selected - 1, wrap=wrap)

    def select_first(self) -> None:
        self.set_selection(0)

    def select_last(self) -> None:
        self.set_selection(len(self._rows) - 1)

    def page_down(self) -> None:
        self.set_selection(self.view.selected + self._selector_page())

    def page_up(self) -> None:
        self.set_selection(self.view.selected - self._selector_page())

    def _ensure_selection_visible(self) -> None:
        visible = self._selector_page()
        start = self.view.selector_start
        if self.view.selected < start:
            start = self.view.selected
        elif self.view.selected >= start + visible:
            start = self.view.selected - visible + 1
        self.view.selector_start = max(0, min(start, max(0, len(self._rows) - visible)))

    # -- detail scrolling ----------------------------------------------

    def _max_detail_start(self) -> int:
        return max(0, len(self._detail_lines) - self._detail_page())

    def scroll_detail(self, delta: int) -> None:
        self._refresh_detail()
        start = self.view.detail_start + delta
        self.view.detail_start = max(0, min(start, self._max_detail_start()))

    def scroll_detail_page(self, pages: int) -> None:
        self.scroll_detail(pages * self._detail_page())

    def scroll_detail_to_top(self) -> None:
        self.view.detail_start = 0

    def scroll_detail_to_bottom(self) -> None:
        self._refresh_detail()
        self.view.detail_start = self._max_detail_start()

    # -- mode ----------------------------------------------------------

    def toggle_fullscreen(self) -> None:
        """Switch modes; the detail viewport starts again from the top."""
        self.view.mode = Mode.SPLIT if self.view.mode is Mode.FULLSCREEN else Mode.FULLSCREEN
        self.view.detail_start = 0

    def exit_fullscreen(self) -> bool:
        """Return to split mode; reports whether anything changed."""
        if self.view.mode is not Mode.FULLSCREEN:
            return False
        self.view.mode = Mode.SPLIT
        self.view.detail_start = 0
        return True

    def resize(self, width: int, height: int) -> None:
        """Record a new terminal size.

        Only the visible row's entry is refreshed on the next paint; other
        rows recompute lazily when they are selected again.
        """
        self.view.width = max(0, width)
        self.view.height = max(0, height)
        self._ensure_selection_visible()

    def set_split_percent(self, percent: float) -> None:
        """Change the selector share of the width; the detail pane reflows lazily."""
        self.split_percent = clamp_split_percent(percent)

    def tick(self) -> None:
        """Advance the loading spinner shown while no rows have arrived."""
        self.view.spinner_frame += 1

    # -- rendering -----------------------------------------------------

    def _code_lines(self, index: int, mode: Mode) -> tuple[str, ...]:
        row = self._rows[index]
        if not row.code:
            return ()
        width = self.code_wrap_width(mode)
        cache = self._caches[mode]
        entry = cache.get(index)
        if entry is None or not entry.matches(row.code, width):
            entry = CacheEntry(row.code, width, tuple(self._highlighter(row.code, self.style, width)))
            cache[index] = entry
        return entry.lines

    def _build_detail_lines(self, index: int, mode: Mode) -> list[str]:
        if not 0 <= index < len(self._rows):
            return [NO_SELECTION_TEXT]
        row = self._rows[index]
        lines: list[str] = []
        if row.description:
            lines.extend(wrap_hanging(row.description, self.content_width(mode)))
            if row.code:
                lines.append("")
        lines.extend(self._code_lines(index, mode))
        return lines

    def _refresh_detail(self) -> None:
        """Rebuild detail content when selection, mode, width, or row changed."""
        if self.view.width <= 0:
            return
        mode = self.view.mode
        index = self.view.selected
        width = self.content_width(mode)
        key = (index, mode, width, self.selected_row())
        if key == self._detail_key:
            return
        self._detail_lines = self._build_detail_lines(index, mode)
        self._detail_key = key
        self.view.last_width[mode] = width
        self.view.detail_start = max(0, min(self.view.detail_start, self._max_detail_start()))

    def render(self, width: int | None = None, height: int | None = None) -> str:
        """Compose one frame of exactly ``height`` rows of ``width`` columns.

        Passing a size different from the last one acts as a resize.
        """
        if width is not None and height is not None and (width, height) != self.size:
            self.resize(width, height)
        width, height = self.size
        if width <= 0 or height <= 0:
            return ""
        self._refresh_detail()

        mode = self.view.mode
        theme = self.ui_theme
        detail_width = self.viewport_width(mode)
        pad_left, pad_right = self._padding(mode)
        if not self._rows:
            detail = render_loading(detail_width, height, self.view.spinner_frame, theme)
        elif self.selected_row() is None:
            detail = render_centered(NO_SELECTION_TEXT, detail_width, height, theme.muted, theme.reset)
        else:
            detail = render_viewport(
                self._detail_lines,
                self.view.detail_start,
                detail_width,
                height,
                pad_left=pad_left,
                pad_right=pad_right,
            )

        selector_width = self.selector_width()
        if mode is Mode.FULLSCREEN or selector_width == 0:
            return "\n".join(detail)

        selector = render_selector(
            self.columns,
            self._rows,
            self.view.selected,
            self.view.selector_start,
            selector_width,
            height,
            theme,
        )
        return "\n".join(join_columns(selector, detail, theme))
