"""Row, column, and mode types for the split pane."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Mode(Enum):
    SPLIT = "split"
    FULLSCREEN = "fullscreen"


@dataclass(frozen=True)
class ColumnConfig:
    """Selector column title and fixed display width."""

    name: str
    width: int


@dataclass(frozen=True)
class Row:
    """One selectable record.

    ``columns`` are pre-rendered display strings, one per configured column;
    the pane never interprets them. ``code`` is raw Cadence source shown
    highlighted under ``description`` in the detail pane.
    """

    columns: tuple[str, ...]
    description: str = ""
    code: str = ""

    @classmethod
    def of(cls, *columns: object) -> Row:
        return cls(columns=tuple(str(column) for column in columns))

    def with_code(self, code: str) -> Row:
        return replace(self, code=code)

    def with_description(self, description: str) -> Row:
        return replace(self, description=description)


def parse_columns(text: str) -> list[ColumnConfig]:
    """Parse ``"Name:20,Type:15"`` into column configs.

    A column without ``:width`` defaults to the title length plus two.
    """
    columns: list[ColumnConfig] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        name, sep, width_text = part.rpartition(":")
        if not sep:
            name = part
            width = len(part) + 2
        else:
            try:
                width = int(width_text)
            except ValueError as exc:
                raise ValueError(f"invalid column width in {part!r}") from exc
            if width <= 0:
                raise ValueError(f"column width must be >= 1 in {part!r}")
        columns.append(ColumnConfig(name=name.strip(), width=width))
    if not columns:
        raise ValueError("at least one column is required")
    return columns
