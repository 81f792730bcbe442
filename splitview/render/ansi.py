"""ANSI-aware text measurement and line shaping utilities.

Provides clipping, padding, and wrapping that preserve escape sequences.
These helpers keep pane rendering aligned when color codes and wide chars
are present.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
MIN_WRAP_WIDTH = 20
RESET = "\033[0m"
OVERSIZE_PLACEHOLDER = "?"
_LEADING_WS_RE = re.compile(r"[ \t]*")


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def ansi_display_width(text: str) -> int:
    """Visible column count of ``text``; escape sequences count as zero."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _is_sgr_reset(seq: str) -> bool:
    """Whether an SGR sequence closes all styling opened before it.

    Pygments closes a token with ``39``/``49``/``00`` combinations, so any of
    those alone counts as a close.
    """
    params = seq[2:-1]
    if not params:
        return True
    return all(part in {"", "0", "00", "39", "49"} for part in params.split(";"))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces.

    A reset is appended after styled content so padding never inherits colors.
    """
    clipped = clip_ansi_line(text, width)
    visible = ansi_display_width(clipped)
    if "\x1b" in clipped:
        clipped += RESET
    return clipped + " " * max(0, width - visible)


def expand_ansi_tabs(text: str) -> str:
    """Replace tabs with spaces up to the next tab stop, skipping escapes."""
    if "\t" not in text:
        return text
    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class _Cell:
    raw_index: int
    ch: str
    width: int


def _visible_cells(text: str) -> list[_Cell]:
    cells: list[_Cell] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                i = match.end()
                continue
        w = char_display_width(text[i], col)
        cells.append(_Cell(i, text[i], w))
        col += w
        i += 1
    return cells


def _line_spans(cells: list[_Cell], width: int) -> list[tuple[int, int, int]]:
    """Choose wrap points as ``(start, end, next_start)`` cell indices.

    Cells in ``[end, next_start)`` are whitespace swallowed by a word break.
    Only visible cells are considered, so styled and plain text break alike.
    """
    spans: list[tuple[int, int, int]] = []
    n = len(cells)
    start = 0
    while start < n:
        col = 0
        cut = start
        while cut < n and col + cells[cut].width <= width:
            col += cells[cut].width
            cut += 1
        if cut == n:
            spans.append((start, n, n))
            break
        if cut == start:
            # A single cell wider than the whole line; drawn as a placeholder.
            spans.append((start, cut + 1, cut + 1))
            start = cut + 1
            continue

        end = cut
        next_start = cut
        for b in range(cut, start, -1):
            if not cells[b].ch.isspace():
                continue
            e = b
            while e > start and cells[e - 1].ch.isspace():
                e -= 1
            if e > start:
                end = e
                next_start = b + 1
                while next_start < n and cells[next_start].ch.isspace():
                    next_start += 1
            break
        spans.append((start, end, next_start))
        start = next_start
    return spans


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap one styled line into chunks of at most ``width`` display columns.

    Breaks at the last whitespace that fits and falls back to a character
    break for unbroken runs (hex strings, base64 blobs). Escape sequences are
    never split; styling open at a break is reset at the end of the chunk and
    re-opened at the start of the next one. A line that already fits is
    returned unchanged.

    A character wider than ``width`` itself (a wide glyph at width 1) is
    replaced by :data:`OVERSIZE_PLACEHOLDER` on its own line.
    """
    width = max(1, width)
    if ansi_display_width(text) <= width:
        return [text]

    text = expand_ansi_tabs(text)
    cells = _visible_cells(text)
    spans = _line_spans(cells, width)

    owner: dict[int, int] = {}
    dropped: set[int] = set()
    oversized = {cell.raw_index for cell in cells if cell.width > width}
    for line_no, (start, end, next_start) in enumerate(spans):
        for idx in range(start, end):
            owner[cells[idx].raw_index] = line_no
        for idx in range(end, next_start):
            dropped.add(cells[idx].raw_index)

    wrapped: list[list[str]] = [[] for _ in spans]
    active: list[str] = []
    line_no = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                wrapped[line_no].append(seq)
                if seq.endswith("m"):
                    if _is_sgr_reset(seq):
                        active = []
                    else:
                        active.append(seq)
                i = match.end()
                continue
        target = owner.get(i)
        if target is not None and target != line_no:
            if active:
                wrapped[line_no].append(RESET)
            line_no = target
            wrapped[line_no].extend(active)
        if i in oversized:
            wrapped[line_no].append(OVERSIZE_PLACEHOLDER)
        elif i not in dropped:
            wrapped[line_no].append(text[i])
        i += 1

    return ["".join(chunk) for chunk in wrapped]


def wrap_ansi_text(text: str, width: int) -> list[str]:
    """Wrap every ``\\n``-separated line of ``text``; see :func:`wrap_ansi_line`."""
    lines: list[str] = []
    for line in text.split("\n"):
        lines.extend(wrap_ansi_line(line, width))
    return lines


def effective_wrap_width(width: int, indent: int = 0) -> int:
    """Usable wrap width after ``indent`` columns, never below :data:`MIN_WRAP_WIDTH`."""
    return max(MIN_WRAP_WIDTH, width - indent)


def wrap_indented(text: str, width: int, indent: str = "") -> list[str]:
    """Wrap ``text`` and prefix every resulting line with ``indent``.

    Continuation lines get the same indentation as the first one, so a
    field value renders as an aligned block.
    """
    body_width = effective_wrap_width(width, ansi_display_width(indent))
    return [f"{indent}{line}" for line in wrap_ansi_text(text, body_width)]


def wrap_hanging(text: str, width: int) -> list[str]:
    """Wrap each line of ``text`` under its own leading whitespace.

    The first chunk of a line keeps its text as written; continuation chunks
    repeat that line's indentation, so ``    memo: long value`` stays an
    aligned block instead of spilling back to column 0.
    """
    lines: list[str] = []
    for line in text.split("\n"):
        indent = _LEADING_WS_RE.match(line).group(0)
        lines.extend(wrap_indented(line[len(indent):], width, indent))
    return lines
