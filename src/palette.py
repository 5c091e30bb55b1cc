"""
Palette - Map terminal colors to concrete RGB values
Named colors come from a 16-entry table, 256-color indices from the xterm cube
"""

from typing import Iterable, Tuple

from ansi_style import Ansi256Color, AnsiColor, Color, RgbColor


class Palette:
    """Immutable table of the 16 named colors"""

    def __init__(self, name: str, colors: Iterable[Tuple[int, int, int]]):
        self.name = name
        self.colors: Tuple[RgbColor, ...] = tuple(RgbColor(*rgb) for rgb in colors)
        if len(self.colors) != 16:
            raise ValueError(f"Palette {name!r} needs 16 colors, got {len(self.colors)}")

    def __getitem__(self, color: AnsiColor) -> RgbColor:
        return self.colors[int(color)]

    def __eq__(self, other):
        return isinstance(other, Palette) and self.colors == other.colors

    def __hash__(self):
        return hash(self.colors)

    def __repr__(self):
        return f"Palette({self.name!r})"


VGA = Palette(
    "vga",
    [
        (0, 0, 0), (170, 0, 0), (0, 170, 0), (170, 85, 0),
        (0, 0, 170), (170, 0, 170), (0, 170, 170), (170, 170, 170),
        (85, 85, 85), (255, 85, 85), (85, 255, 85), (255, 255, 85),
        (85, 85, 255), (255, 85, 255), (85, 255, 255), (255, 255, 255),
    ],
)

WIN10_CONSOLE = Palette(
    "win10",
    [
        (12, 12, 12), (197, 15, 31), (19, 161, 14), (193, 156, 0),
        (0, 55, 218), (136, 23, 152), (58, 150, 221), (204, 204, 204),
        (118, 118, 118), (231, 72, 86), (22, 198, 12), (249, 241, 165),
        (59, 120, 255), (180, 0, 158), (97, 214, 214), (242, 242, 242),
    ],
)

XTERM = Palette(
    "xterm",
    [
        (0, 0, 0), (205, 0, 0), (0, 205, 0), (205, 205, 0),
        (0, 0, 238), (205, 0, 205), (0, 205, 205), (229, 229, 229),
        (127, 127, 127), (255, 0, 0), (0, 255, 0), (255, 255, 0),
        (92, 92, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
    ],
)

PALETTES = {palette.name: palette for palette in (VGA, WIN10_CONSOLE, XTERM)}

# 6x6x6 cube channel levels
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _ansi256_to_rgb(index: int, palette: Palette) -> RgbColor:
    if index < 16:
        return palette[AnsiColor(index)]

    if index < 232:
        i = index - 16
        r = _CUBE_LEVELS[i // 36]
        g = _CUBE_LEVELS[(i % 36) // 6]
        b = _CUBE_LEVELS[i % 6]
        return RgbColor(r, g, b)

    gray = 8 + (index - 232) * 10
    return RgbColor(gray, gray, gray)


def color_to_rgb(color: Color, palette: Palette) -> RgbColor:
    """Resolve any terminal color to RGB; RGB colors pass through"""
    if isinstance(color, RgbColor):
        return color
    if isinstance(color, Ansi256Color):
        return _ansi256_to_rgb(color.index, palette)
    if isinstance(color, AnsiColor):
        return palette[color]
    raise TypeError(f"Not a terminal color: {color!r}")


def rgb_hex(color: Color, palette: Palette) -> str:
    """CSS value for a color, e.g. ``#C50F1F``"""
    return color_to_rgb(color, palette).hex()


def get_palette(name: str) -> Palette:
    """Look up a built-in palette by name (``vga``, ``win10``, ``xterm``)"""
    try:
        return PALETTES[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(PALETTES))
        raise ValueError(f"Unknown palette {name!r} (expected one of: {known})") from None
