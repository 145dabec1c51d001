"""Unit tests for the colour palette."""

from rich.color import Color

from codeloom.palette import (
    EXTENDED_COLORS,
    PALETTE,
    STANDARD_COLORS,
    palette_color,
    palette_style,
)


class TestPaletteTable:
    """Tests for the palette contents."""

    def test_standard_colours_first(self) -> None:
        """Test that the palette starts with the standard colours."""
        assert PALETTE[: len(STANDARD_COLORS)] == STANDARD_COLORS
        assert STANDARD_COLORS == (1, 2, 3, 4, 5, 6, 9, 10, 11, 12, 13, 14, 15)

    def test_cube_colours_complete(self) -> None:
        """Test that every 6x6x6 cube colour appears exactly once."""
        assert sorted(EXTENDED_COLORS) == list(range(16, 232))

    def test_cube_colours_shuffled(self) -> None:
        """Test that consecutive entries are not walked in cube order."""
        assert list(EXTENDED_COLORS) != sorted(EXTENDED_COLORS)

    def test_no_duplicates(self) -> None:
        """Test that no two palette entries share a colour."""
        assert len(set(PALETTE)) == len(PALETTE) == 229


class TestPaletteLookup:
    """Tests for index to colour and style mapping."""

    def test_palette_color(self) -> None:
        """Test lookup of the first and last entries."""
        assert palette_color(0) == 1
        assert palette_color(len(PALETTE) - 1) == PALETTE[-1]

    def test_wraps_around(self) -> None:
        """Test that indices past the end wrap to the start."""
        assert palette_color(len(PALETTE)) == palette_color(0)
        assert palette_color(len(PALETTE) + 5) == palette_color(5)

    def test_background_is_palette_colour(self) -> None:
        """Test that the style background is the palette colour."""
        style = palette_style(13)

        assert style.bgcolor == Color.from_ansi(PALETTE[13])

    def test_standard_colour_black_text(self) -> None:
        """Test that standard colours use black text."""
        assert palette_style(0).color == Color.parse("black")

    def test_cube_colour_contrast(self) -> None:
        """Test that dark cube rows use white text and light rows black."""
        dark_index = PALETTE.index(16)
        light_index = PALETTE.index(34)

        assert palette_style(dark_index).color == Color.parse("white")
        assert palette_style(light_index).color == Color.parse("black")
