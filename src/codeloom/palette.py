"""Colour palette for provenance-coloured output.

Colours are xterm-256 indices. The first entries are the standard terminal
colours (skipping black, grey and white, which read poorly as backgrounds);
the rest is a pre-shuffled walk over the 6x6x6 colour cube so that tokens
registered one after another get visibly different colours.
"""

from rich.color import Color
from rich.style import Style

STANDARD_COLORS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 9, 10, 11, 12, 13, 14, 15)

EXTENDED_COLORS: tuple[int, ...] = (
    21, 127, 82, 190, 196, 58, 205, 201, 188, 202, 60, 95, 161, 100, 129, 162,
    72, 225, 222, 23, 219, 194, 166, 20, 24, 148, 155, 197, 132, 61, 149, 221,
    108, 139, 145, 138, 146, 87, 173, 142, 184, 101, 34, 102, 185, 68, 55, 169,
    203, 158, 16, 124, 213, 98, 164, 96, 151, 172, 181, 135, 79, 113, 19, 147,
    192, 137, 206, 144, 186, 183, 214, 40, 62, 230, 103, 54, 128, 33, 78, 99,
    118, 175, 116, 17, 187, 180, 41, 53, 159, 91, 47, 130, 208, 218, 152, 51,
    212, 83, 37, 171, 76, 35, 189, 223, 90, 176, 163, 52, 43, 125, 178, 120,
    123, 200, 109, 195, 229, 92, 39, 32, 153, 168, 165, 117, 84, 44, 94, 107,
    28, 207, 191, 70, 22, 74, 66, 131, 114, 42, 50, 104, 215, 97, 45, 143, 211,
    226, 110, 112, 126, 199, 67, 29, 157, 227, 57, 156, 73, 154, 85, 167, 228,
    89, 141, 80, 77, 18, 93, 224, 174, 63, 115, 65, 49, 106, 36, 75, 193, 182,
    150, 81, 25, 136, 119, 122, 27, 71, 220, 105, 86, 133, 30, 217, 140, 59,
    198, 88, 179, 177, 204, 46, 121, 210, 64, 56, 48, 170, 231, 111, 31, 160,
    209, 26, 216, 69, 134, 38,
)

PALETTE: tuple[int, ...] = STANDARD_COLORS + EXTENDED_COLORS

# Index of the first cube colour in the xterm-256 table
_CUBE_START = 16
_CUBE_ROW = 36


def palette_color(index: int) -> int:
    """Return the xterm-256 colour number for a palette index.

    Indices wrap around once the palette is exhausted.
    """
    return PALETTE[index % len(PALETTE)]


def palette_style(index: int) -> Style:
    """Return the background/foreground style for a palette index.

    Standard colours get black text. Cube colours get white text in the
    darker half of each 36-colour block and black text in the lighter half.

    Args:
        index: Palette index (0-based)

    Returns:
        rich Style with background and contrasting foreground
    """
    number = palette_color(index)
    background = Color.from_ansi(number)
    if number < _CUBE_START:
        return Style(color="black", bgcolor=background)

    row = (number - _CUBE_START) % _CUBE_ROW
    foreground = "white" if row < _CUBE_ROW // 2 else "black"
    return Style(color=foreground, bgcolor=background)
