"""JSON Lines row feed delivered through a single queue hand-off.

A reader thread decodes one message per line and puts it on a queue; the
event loop drains the queue without blocking at the start of each step.
"""

from __future__ import annotations

import json
import logging
import queue
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import IO

from ..errors import FeedError
from ..split_pane import Row, SplitPane

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppendRows:
    rows: tuple[Row, ...]


@dataclass(frozen=True)
class ReplaceRows:
    rows: tuple[Row, ...]


@dataclass(frozen=True)
class UpdateRow:
    index: int
    row: Row


FeedMessage = AppendRows | ReplaceRows | UpdateRow


def decode_row(data: object) -> Row:
    """Build a :class:`Row` from ``{"columns": [...], "description": ..., "code": ...}``."""
    if not isinstance(data, dict):
        raise FeedError(f"row must be an object, got {type(data).__name__}")
    columns = data.get("columns")
    if not isinstance(columns, list):
        raise FeedError("row needs a 'columns' list")
    description = data.get("description", "")
    code = data.get("code", "")
    if not isinstance(description, str) or not isinstance(code, str):
        raise FeedError("row 'description' and 'code' must be strings")
    return Row(
        columns=tuple("" if column is None else str(column) for column in columns),
        description=description,
        code=code,
    )


def _decode_rows(data: object) -> tuple[Row, ...]:
    if not isinstance(data, list):
        raise FeedError("expected a list of rows")
    return tuple(decode_row(item) for item in data)


def decode_message(line: str) -> FeedMessage:
    """Decode one JSON Lines message.

    Accepted shapes: a bare row, ``{"rows": [...]}``, ``{"replace": [...]}``
    and ``{"update": index, "row": {...}}``.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as exc:
        raise FeedError(f"invalid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise FeedError("message must be a JSON object")
    if "replace" in data:
        return ReplaceRows(_decode_rows(data["replace"]))
    if "rows" in data:
        return AppendRows(_decode_rows(data["rows"]))
    if "update" in data:
        index = data["update"]
        if isinstance(index, bool) or not isinstance(index, int):
            raise FeedError("'update' must be an integer row index")
        return UpdateRow(index, decode_row(data.get("row")))
    return AppendRows((decode_row(data),))


def iter_messages(lines: Iterable[str]) -> Iterator[FeedMessage]:
    """Decode messages from ``lines``, skipping blanks and malformed entries."""
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield decode_message(line)
        except FeedError as exc:
            log.warning("feed line %d skipped: %s", line_no, exc)


def apply_message(pane: SplitPane, message: FeedMessage) -> None:
    if isinstance(message, ReplaceRows):
        pane.replace_rows(message.rows)
    elif isinstance(message, AppendRows):
        pane.append_rows(message.rows)
    elif isinstance(message, UpdateRow):
        pane.update_row(message.index, message.row)


class RowFeed:
    """Background reader posting decoded messages to a queue."""

    def __init__(self, stream: IO[str], *, name: str = "feed") -> None:
        self._stream = stream
        self._name = name
        self._queue: queue.Queue[FeedMessage] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._done = threading.Event()

    @property
    def finished(self) -> bool:
        return self._done.is_set() and self._queue.empty()

    def start(self) -> RowFeed:
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name=f"splitview-{self._name}", daemon=True)
            self._thread.start()
        return self

    def _run(self) -> None:
        log.info("reading rows from %s", self._name)
        try:
            for message in iter_messages(self._stream):
                self._queue.put(message)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("feed %s stopped: %s", self._name, exc)
        finally:
            self._done.set()
            log.info("feed %s closed", self._name)

    def drain(self) -> list[FeedMessage]:
        """Return every message queued so far without blocking."""
        messages: list[FeedMessage] = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
