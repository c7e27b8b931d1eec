"""Grid geometry tests.

Covers column-count clamping, exact partitioning of items into columns,
scroll-offset adjustment, and degenerate terminal sizes.
"""

from __future__ import annotations

import unittest

from gridpick.layout import (
    FIXED_HEADER_ROWS,
    MAX_COLUMNS,
    MIN_COLUMN_WIDTH,
    column_of,
    column_range,
    compute_layout,
    relayout,
    row_of,
    scroll_to_row,
)


class ComputeLayoutTests(unittest.TestCase):
    def test_column_count_stays_within_bounds_for_all_widths(self) -> None:
        for width in range(1, 400, 7):
            layout = compute_layout(width, 30, 100)
            self.assertGreaterEqual(layout.column_count, 1)
            self.assertLessEqual(layout.column_count, MAX_COLUMNS)
            self.assertEqual(len(layout.column_widths), layout.column_count)

    def test_column_count_follows_min_width(self) -> None:
        self.assertEqual(compute_layout(MIN_COLUMN_WIDTH * 2, 30, 100).column_count, 2)
        self.assertEqual(compute_layout(MIN_COLUMN_WIDTH * 2 - 1, 30, 100).column_count, 1)
        self.assertEqual(compute_layout(10_000, 30, 100).column_count, MAX_COLUMNS)

    def test_custom_limits(self) -> None:
        layout = compute_layout(100, 30, 50, min_column_width=20, max_columns=3)
        self.assertEqual(layout.column_count, 3)
        self.assertEqual(layout.items_per_column, 17)

    def test_items_per_column_is_ceiling(self) -> None:
        layout = compute_layout(MIN_COLUMN_WIDTH * 2, 30, 7)
        self.assertEqual(layout.items_per_column, 4)

    def test_visible_rows_reserve_header_rows(self) -> None:
        self.assertEqual(compute_layout(80, 30, 10).visible_rows_per_column, 30 - FIXED_HEADER_ROWS)
        self.assertEqual(compute_layout(80, 2, 10).visible_rows_per_column, 1)

    def test_zero_items_gives_one_empty_column(self) -> None:
        layout = compute_layout(200, 30, 0)
        self.assertEqual(layout.column_count, 1)
        self.assertEqual(layout.items_per_column, 0)
        self.assertEqual(list(column_range(layout, 0, 0)), [])
        self.assertEqual(column_of(layout, 0), 0)
        self.assertEqual(row_of(layout, 0), 0)

    def test_tiny_terminal_does_not_raise(self) -> None:
        layout = compute_layout(1, 1, 5)
        self.assertEqual(layout.column_count, 1)
        self.assertEqual(layout.visible_rows_per_column, 1)
        self.assertTrue(all(width >= 1 for width in layout.column_widths))

    def test_column_widths_fit_inside_box(self) -> None:
        layout = compute_layout(123, 30, 40)
        gaps = 2 * (layout.column_count - 1)
        self.assertLessEqual(sum(layout.column_widths) + gaps, 123 - 4)


class ColumnPartitionTests(unittest.TestCase):
    def test_columns_partition_items_exactly(self) -> None:
        for width in (1, 45, 85, 130, 200):
            for count in range(0, 40):
                layout = compute_layout(width, 20, count)
                seen: list[int] = []
                for column in range(layout.column_count):
                    seen.extend(column_range(layout, count, column))
                self.assertEqual(seen, list(range(count)), (width, count))

    def test_seven_items_in_two_columns_split_four_and_three(self) -> None:
        layout = compute_layout(MIN_COLUMN_WIDTH * 2, 20, 7)
        self.assertEqual(list(column_range(layout, 7, 0)), [0, 1, 2, 3])
        self.assertEqual(list(column_range(layout, 7, 1)), [4, 5, 6])


class ScrollTests(unittest.TestCase):
    def test_scroll_moves_minimally(self) -> None:
        layout = compute_layout(80, FIXED_HEADER_ROWS + 5, 50)
        self.assertEqual(layout.visible_rows_per_column, 5)
        self.assertEqual(scroll_to_row(layout, 4).scroll_offset, 0)
        down = scroll_to_row(layout, 5)
        self.assertEqual(down.scroll_offset, 1)
        further = scroll_to_row(down, 20)
        self.assertEqual(further.scroll_offset, 16)
        self.assertEqual(scroll_to_row(further, 18).scroll_offset, 16)
        self.assertEqual(scroll_to_row(further, 3).scroll_offset, 3)

    def test_scroll_is_clamped_to_column_length(self) -> None:
        layout = compute_layout(MIN_COLUMN_WIDTH, FIXED_HEADER_ROWS + 5, 8)
        self.assertEqual(scroll_to_row(layout, 100).scroll_offset, 3)
        self.assertEqual(scroll_to_row(layout, -3).scroll_offset, 0)

    def test_relayout_keeps_cursor_visible_after_shrink(self) -> None:
        tall = scroll_to_row(compute_layout(MIN_COLUMN_WIDTH, 60, 100), 50)
        short = relayout(tall, MIN_COLUMN_WIDTH, FIXED_HEADER_ROWS + 4, 100, cursor_index=50)
        self.assertLessEqual(short.scroll_offset, 50)
        self.assertLess(50, short.scroll_offset + short.visible_rows_per_column)


if __name__ == "__main__":
    unittest.main()
