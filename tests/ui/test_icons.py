"""
Tests for icon utilities.

These tests verify the cell-width-aware padding used to line up
names after status icons.
"""

import rich.cells as _rich_cells

import skillshelf.ui.icons as icons


class TestCellWidthPadding:
    """Tests for cell_ljust."""

    def test_cell_ljust_pads_on_right(self) -> None:
        """cell_ljust adds spaces after text."""
        assert icons.cell_ljust("a", 5) == "a    "

    def test_no_padding_when_text_fills_width(self) -> None:
        """No spaces added when text already fills width."""
        assert icons.cell_ljust("abcde", 5) == "abcde"

    def test_no_truncation_when_text_exceeds_width(self) -> None:
        """Longer text is returned unchanged."""
        assert icons.cell_ljust("abcdef", 5) == "abcdef"


class TestIcons:
    """Tests for the padded status icons."""

    def test_icons_fill_default_width(self) -> None:
        """Every padded icon occupies the same number of cells."""
        for padded in (icons.icon_success(), icons.icon_failure(), icons.icon_warning()):
            assert _rich_cells.cell_len(padded) >= icons.DEFAULT_ICON_WIDTH

    def test_icons_start_with_symbol(self) -> None:
        """Padding goes after the symbol."""
        assert icons.icon_success().startswith(icons.ICON_SUCCESS)
        assert icons.icon_failure().startswith(icons.ICON_FAILURE)
        assert icons.icon_warning().startswith(icons.ICON_WARNING)

    def test_success_icon_is_checkmark_and_space(self) -> None:
        """The checkmark is one cell wide, so one space follows it."""
        assert icons.icon_success() == "✓ "
