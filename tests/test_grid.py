"""Tests for the grid model: construction, trimming and value semantics."""

import pytest
from src.engine import Grid, Position, GAP


class TestGridConstruction:
    """Building grids from character rows."""

    def test_rows_become_cells(self):
        """Letters are uppercased and spaces become gaps."""
        grid = Grid.from_rows(["ca ", "dog"])
        assert grid.height == 2
        assert grid.width == 3
        assert grid.cell((0, 0)).letter == "C"
        assert grid.cell((0, 2)).is_gap
        assert grid.to_rows() == ["CA ", "DOG"]

    def test_short_rows_are_padded(self):
        """Ragged input is padded with gaps to the widest row."""
        grid = Grid.from_rows(["A", "BCD"])
        assert grid.width == 3
        assert grid.cell((0, 2)).is_gap

    def test_list_rows_are_accepted(self):
        """Rows may be lists of characters, with empty strings as gaps."""
        grid = Grid.from_rows([["C", "", "T"]])
        assert grid.to_rows() == ["C T"]

    def test_multi_character_cell_rejected(self):
        """A cell holds exactly one character."""
        with pytest.raises(ValueError):
            Grid.from_rows([["AB", "C"]])

    def test_blank_grid(self):
        """A blank grid is all gaps."""
        grid = Grid.blank(4)
        assert grid.height == 4 and grid.width == 4
        assert grid.visible_count == 0

    def test_cells_remember_coordinates(self):
        """Each cell starts out knowing its own row and column."""
        grid = Grid.from_rows(["AB", "CD"])
        cell = grid.cell((1, 0))
        assert (cell.row, cell.col) == (1, 0)


class TestGridAccess:
    """Reading cells and letters."""

    def test_out_of_bounds_raises(self):
        """Accessing outside the grid is a programming error."""
        grid = Grid.from_rows(["ABC"])
        with pytest.raises(ValueError):
            grid.cell((1, 0))

    def test_is_letter_outside_grid(self):
        """is_letter never raises, even off the grid."""
        grid = Grid.from_rows(["ABC"])
        assert grid.is_letter((0, 1)) is True
        assert grid.is_letter((0, -1)) is False
        assert grid.is_letter((5, 5)) is False

    def test_letter_positions(self):
        """Only visible letters are listed."""
        grid = Grid.from_rows(["A C", " B "])
        assert grid.letter_positions() == [Position(0, 0), Position(0, 2), Position(1, 1)]
        assert grid.visible_count == 3


class TestGridValues:
    """Operations return new grids and leave the original alone."""

    def test_swap_letters(self):
        """Letters trade places while cell identities stay put."""
        grid = Grid.from_rows(["CTA"])
        swapped = grid.swap_letters((0, 1), (0, 2))
        assert swapped.to_rows() == ["CAT"]
        assert grid.to_rows() == ["CTA"]
        assert swapped.cell((0, 1)).col == 1

    def test_clear(self):
        """Cleared cells stop being visible but are not gaps."""
        grid = Grid.from_rows(["CAT"])
        cleared = grid.clear([(0, 0), (0, 1)])
        assert cleared.visible_count == 1
        assert cleared.cell((0, 0)).cleared is True
        assert cleared.cell((0, 0)).is_gap is False
        assert cleared.letter_at((0, 0)) == ""
        assert grid.visible_count == 3

    def test_render(self):
        """Rendering marks empty slots with dots."""
        grid = Grid.from_rows(["C T"])
        assert grid.render() == "C.T"


class TestTrim:
    """Cropping the authoring grid to the play grid."""

    def test_trim_to_bounding_box(self):
        """Empty rows and columns around the letters are dropped."""
        grid = Grid.from_rows([
            "     ",
            "  CAT",
            "  D  ",
            "     ",
        ])
        trimmed = grid.trim()
        assert trimmed.to_rows() == ["CAT", "D  "]

    def test_trim_keeps_original_coordinates(self):
        """Trimmed cells still carry their authoring-grid row and column."""
        grid = Grid.from_rows([
            "     ",
            "  CAT",
        ])
        cell = grid.trim().cell((0, 0))
        assert cell.letter == "C"
        assert (cell.row, cell.col) == (1, 2)

    def test_trim_empty_grid(self):
        """A grid without letters trims to nothing."""
        trimmed = Grid.from_rows([GAP * 3, GAP * 3]).trim()
        assert trimmed.height == 0
        assert trimmed.width == 0
