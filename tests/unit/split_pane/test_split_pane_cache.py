"""Per-(row, mode) code cache behavior of ``SplitPane``.

Each row keeps one highlighted rendering per display mode. Updates drop
only the touched row, appends keep everything, and replace clears all.
"""

from __future__ import annotations

import unittest

from splitview.split_pane import ColumnConfig, Mode, Row, SplitPane

CONTRACT = """access(all) contract Counter {
    access(all) var count: Int

    access(all) fun increment(by: Int): Int {
        self.count = self.count + by // bump the stored counter by the given amount
        return self.count
    }
}
"""

COLUMNS = (ColumnConfig("Name", 12), ColumnConfig("Type", 8))


class RecordingHighlighter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def __call__(self, source: str, style: str | None, width: int) -> list[str]:
        self.calls.append((source, width))
        return [f"{source}@{width}"]


def _rows(count: int) -> list[Row]:
    return [Row.of(f"item{i}", "tx").with_code(f"code{i}") for i in range(count)]


def _visit_all(pane: SplitPane) -> None:
    for index in range(pane.row_count):
        pane.set_selection(index)
        pane.render()
        pane.toggle_fullscreen()
        pane.render()
        pane.toggle_fullscreen()
        pane.render()


class SplitPaneCacheTests(unittest.TestCase):
    def test_update_row_drops_only_that_rows_entries(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=_rows(3), highlighter=highlighter)
        pane.render(120, 30)
        _visit_all(pane)

        all_keys = {(i, mode) for i in range(3) for mode in Mode}
        self.assertEqual(pane.cache_keys(), all_keys)

        pane.set_selection(2)
        kept = {key: pane.cache_entry(*key) for key in all_keys if key[0] != 2}
        pane.update_row(2, Row.of("item2", "tx").with_code("fresh"))

        self.assertEqual(pane.cache_keys(), set(kept))
        for key, entry in kept.items():
            self.assertIs(pane.cache_entry(*key), entry)

        pane.render()
        refreshed = pane.cache_entry(2, Mode.SPLIT)
        self.assertIsNotNone(refreshed)
        self.assertEqual(refreshed.code, "fresh")
        self.assertIsNone(pane.cache_entry(2, Mode.FULLSCREEN))
        self.assertEqual(pane.detail_lines(), [f"fresh@{pane.code_wrap_width()}"])

    def test_update_outside_row_range_is_ignored(self) -> None:
        pane = SplitPane(COLUMNS, rows=_rows(2), highlighter=RecordingHighlighter())
        pane.render(120, 30)
        before_rows = pane.rows
        before_keys = pane.cache_keys()

        pane.update_row(7, Row.of("late"))
        pane.update_row(-1, Row.of("late"))

        self.assertEqual(pane.rows, before_rows)
        self.assertEqual(pane.cache_keys(), before_keys)

    def test_toggle_highlights_only_selected_row_for_new_mode(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=_rows(3), highlighter=highlighter)
        pane.render(120, 30)
        pane.toggle_fullscreen()
        pane.render()

        self.assertEqual(highlighter.calls, [("code0", 82), ("code0", 118)])
        self.assertEqual(pane.cache_keys(), {(0, Mode.SPLIT), (0, Mode.FULLSCREEN)})

    def test_mode_round_trip_reuses_cached_lines(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=_rows(2), highlighter=highlighter)
        pane.render(120, 30)
        pane.toggle_fullscreen()
        pane.render()
        pane.toggle_fullscreen()
        pane.render()

        self.assertEqual(len(highlighter.calls), 2)

    def test_split_and_fullscreen_frames_do_not_leak(self) -> None:
        rows = [Row.of("Counter", "contract").with_code(CONTRACT), Row.of("Other", "script").with_code("let x = 1")]
        pane = SplitPane(COLUMNS, rows=rows)

        split_before = pane.render(100, 20)
        pane.toggle_fullscreen()
        fullscreen = pane.render()
        pane.toggle_fullscreen()
        split_after = pane.render()

        self.assertNotEqual(split_before, fullscreen)
        self.assertEqual(split_before, split_after)

    def test_resize_recomputes_visible_row_only(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=_rows(2), highlighter=highlighter)
        pane.render(120, 30)
        pane.set_selection(1)
        pane.render()
        calls_before = len(highlighter.calls)

        pane.render(100, 30)

        self.assertEqual(highlighter.calls[calls_before:], [("code1", 68)])
        self.assertEqual(pane.cache_entry(0, Mode.SPLIT).width, 82)

        pane.set_selection(0)
        pane.render()
        self.assertEqual(highlighter.calls[-1], ("code0", 68))
        self.assertEqual(pane.cache_entry(0, Mode.SPLIT).width, 68)

    def test_append_keeps_cache_and_selection(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=_rows(2), highlighter=highlighter)
        pane.render(120, 30)
        pane.set_selection(1)
        pane.render()
        keys = pane.cache_keys()
        calls = len(highlighter.calls)

        pane.append_rows(_rows(4)[2:])
        pane.append_row(Row.of("item4"))
        pane.render()

        self.assertEqual(pane.row_count, 5)
        self.assertEqual(pane.selected_index, 1)
        self.assertEqual(pane.cache_keys(), keys)
        self.assertEqual(len(highlighter.calls), calls)

    def test_replace_clears_cache_and_resets_selection(self) -> None:
        pane = SplitPane(COLUMNS, rows=_rows(5), highlighter=RecordingHighlighter())
        pane.render(120, 30)
        pane.set_selection(4)
        pane.render()

        pane.replace_rows(_rows(2))

        self.assertEqual(pane.cache_keys(), set())
        self.assertEqual(pane.selected_index, 0)
        self.assertEqual(pane.view.selector_start, 0)
        self.assertEqual(pane.detail_lines(), ["code0@82"])

    def test_rows_without_code_are_never_highlighted(self) -> None:
        highlighter = RecordingHighlighter()
        pane = SplitPane(COLUMNS, rows=[Row.of("a").with_description("only text")], highlighter=highlighter)
        pane.render(120, 30)

        self.assertEqual(highlighter.calls, [])
        self.assertEqual(pane.cache_keys(), set())
        self.assertEqual(pane.detail_lines(), ["only text"])

    def test_description_precedes_code_after_blank_line(self) -> None:
        row = Row.of("a").with_description("moves tokens").with_code("code")
        pane = SplitPane(COLUMNS, rows=[row], highlighter=RecordingHighlighter())
        pane.render(120, 30)

        self.assertEqual(pane.detail_lines(), ["moves tokens", "", "code@82"])


class SplitPaneSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pane = SplitPane(COLUMNS, rows=_rows(4), highlighter=RecordingHighlighter())
        self.pane.render(80, 10)

    def test_selection_clamps_into_range(self) -> None:
        self.pane.set_selection(99)
        self.assertEqual(self.pane.selected_index, 3)
        self.pane.set_selection(-5)
        self.assertEqual(self.pane.selected_index, 0)

    def test_selection_wraps_when_requested(self) -> None:
        self.pane.select_previous(wrap=True)
        self.assertEqual(self.pane.selected_index, 3)
        self.pane.select_next(wrap=True)
        self.assertEqual(self.pane.selected_index, 0)

    def test_first_last_and_paging(self) -> None:
        self.pane.select_last()
        self.assertEqual(self.pane.selected_index, 3)
        self.pane.select_first()
        self.assertEqual(self.pane.selected_index, 0)
        self.pane.page_down()
        self.assertEqual(self.pane.selected_index, 3)
        self.pane.page_up()
        self.assertEqual(self.pane.selected_index, 0)

    def test_empty_pane_selection_is_noop(self) -> None:
        pane = SplitPane(COLUMNS)
        pane.select_next()
        pane.set_selection(3)
        self.assertEqual(pane.selected_index, 0)
        self.assertIsNone(pane.selected_row())

    def test_exit_fullscreen_reports_change(self) -> None:
        self.assertFalse(self.pane.exit_fullscreen())
        self.pane.toggle_fullscreen()
        self.assertTrue(self.pane.exit_fullscreen())
        self.assertIs(self.pane.mode, Mode.SPLIT)

    def test_split_percent_is_clamped(self) -> None:
        self.pane.set_split_percent(2.0)
        self.assertEqual(self.pane.split_percent, 0.95)
        self.pane.set_split_percent(0.0)
        self.assertEqual(self.pane.split_percent, 0.05)


if __name__ == "__main__":
    unittest.main()
