from __future__ import annotations

import unittest

from lazypick.selection import SelectionModel


class SelectionModelTests(unittest.TestCase):
    def test_reset_selects_first_row_or_nothing(self) -> None:
        selection = SelectionModel()

        selection.reset(3)
        self.assertEqual(selection.selected, 0)

        selection.reset(0)
        self.assertIsNone(selection.selected)

    def test_navigation_saturates_without_wrapping(self) -> None:
        selection = SelectionModel()
        selection.reset(2)

        self.assertFalse(selection.select_previous())
        self.assertEqual(selection.selected, 0)
        self.assertTrue(selection.select_next())
        self.assertFalse(selection.select_next())
        self.assertEqual(selection.selected, 1)

    def test_navigation_is_noop_when_empty(self) -> None:
        selection = SelectionModel()
        selection.reset(0)

        self.assertFalse(selection.select_next())
        self.assertFalse(selection.select_previous())
        self.assertIsNone(selection.selected)

    def test_confirm_returns_selected_item_or_none(self) -> None:
        selection = SelectionModel()
        selection.reset(2)
        selection.select_next()

        self.assertEqual(selection.confirm(["a", "b"]), "b")
        selection.reset(0)
        self.assertIsNone(selection.confirm([]))

    def test_scroll_into_view_follows_selection(self) -> None:
        selection = SelectionModel()
        selection.reset(10)
        for _ in range(7):
            selection.select_next()

        selection.scroll_into_view(visible_rows=3)
        self.assertEqual(selection.list_start, 5)

        for _ in range(6):
            selection.select_previous()
        selection.scroll_into_view(visible_rows=3)
        self.assertEqual(selection.list_start, 1)

    def test_reset_rewinds_scroll_window(self) -> None:
        selection = SelectionModel(selected=8, length=10, list_start=6)

        selection.reset(4)

        self.assertEqual(selection.list_start, 0)
        self.assertEqual(selection.selected, 0)


if __name__ == "__main__":
    unittest.main()
