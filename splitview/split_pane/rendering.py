"""Frame composition for the selector list and detail viewport.

Every function here is pure: it receives already-computed lines and
geometry and returns screen rows padded to their exact widths.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..render.ansi import RESET, ansi_display_width, clip_ansi_line, pad_ansi_line
from ..ui_theme import UITheme
from .model import ColumnConfig, Row

DIVIDER = "│"
SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")
CELL_GAP = " "


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.selected:
        return text
    # Keep the selection style active even when the text contains internal resets.
    return theme.selected + text.replace(RESET, RESET + theme.selected) + theme.reset


def format_cells(cells: Sequence[str], columns: Sequence[ColumnConfig]) -> str:
    """Lay out cell strings at their column widths, separated by one space.

    Missing cells render blank; extra cells beyond the configured columns are
    ignored.
    """
    parts: list[str] = []
    for idx, column in enumerate(columns):
        cell = cells[idx] if idx < len(cells) else ""
        parts.append(pad_ansi_line(cell.replace("\n", " "), column.width))
    return CELL_GAP.join(parts)


def selector_rows(height: int) -> int:
    """Row slots below the header line."""
    return max(0, height - 1)


def render_selector(
    columns: Sequence[ColumnConfig],
    rows: Sequence[Row],
    selected: int,
    start: int,
    width: int,
    height: int,
    theme: UITheme,
) -> list[str]:
    out: list[str] = []
    if height <= 0:
        return out
    header = format_cells([column.name for column in columns], columns)
    header = pad_ansi_line(header, width)
    out.append(f"{theme.header}{header}{theme.reset}" if theme.header else header)

    for slot in range(selector_rows(height)):
        idx = start + slot
        if idx >= len(rows):
            out.append(" " * width)
            continue
        line = pad_ansi_line(format_cells(rows[idx].columns, columns), width)
        if idx == selected:
            line = selected_with_ansi(line, theme)
        out.append(line)
    return out


def render_viewport(
    lines: Sequence[str],
    start: int,
    width: int,
    height: int,
    *,
    pad_left: int = 0,
    pad_right: int = 0,
) -> list[str]:
    """Render ``height`` rows of ``lines`` from ``start`` inside padding."""
    inner = max(0, width - pad_left - pad_right)
    out: list[str] = []
    for row in range(height):
        idx = start + row
        text = lines[idx] if 0 <= idx < len(lines) else ""
        body = pad_ansi_line(text, inner)
        out.append(pad_ansi_line(" " * pad_left + body, width))
    return out


def render_centered(message: str, width: int, height: int, style: str = "", reset: str = "") -> list[str]:
    """Center one message line inside an otherwise blank block."""
    out = [" " * width for _ in range(height)]
    if height <= 0 or width <= 0:
        return out
    text = clip_ansi_line(message, width)
    visible = ansi_display_width(text)
    left = (width - visible) // 2
    styled = f"{style}{text}{reset}" if style else text
    out[(height - 1) // 2] = " " * left + styled + " " * (width - visible - left)
    return out


def render_loading(width: int, height: int, frame: int, theme: UITheme) -> list[str]:
    spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
    return render_centered(f"{spinner} Loading...", width, height, theme.spinner, theme.reset)


def join_columns(left: Sequence[str], right: Sequence[str], theme: UITheme) -> list[str]:
    """Place two equal-height blocks side by side with a divider column."""
    divider = f"{theme.divider}{DIVIDER}{theme.reset}" if theme.divider else DIVIDER
    return [f"{left_line}{divider}{right_line}" for left_line, right_line in zip(left, right)]
