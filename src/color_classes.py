"""
Color Class Registry - One CSS class per distinct (role, color) pair
Class names are stable so identical input always yields identical CSS
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ansi_extractor import Element
from ansi_style import Ansi256Color, AnsiColor, Color, RgbColor
from palette import Palette, rgb_hex

logger = logging.getLogger(__name__)

FG_PREFIX = "fg"
BG_PREFIX = "bg"
UNDERLINE_PREFIX = "underline"


def color_class_name(prefix: str, color: Color) -> str:
    """CSS class for a color in a role, e.g. ``fg-bright-red`` or ``bg-ansi256-196``"""
    if isinstance(color, AnsiColor):
        return f"{prefix}-{color.css_name}"
    if isinstance(color, Ansi256Color):
        return f"{prefix}-ansi256-{color.index:03}"
    if isinstance(color, RgbColor):
        return f"{prefix}-rgb-{color.r:02X}{color.g:02X}{color.b:02X}"
    raise TypeError(f"Not a terminal color: {color!r}")


def fg_class(element: Element) -> Optional[str]:
    color = element.style.fg
    return color_class_name(FG_PREFIX, color) if color is not None else None


def bg_class(element: Element) -> Optional[str]:
    color = element.style.bg
    return color_class_name(BG_PREFIX, color) if color is not None else None


def underline_class(element: Element) -> Optional[str]:
    color = element.style.underline_color
    return color_class_name(UNDERLINE_PREFIX, color) if color is not None else None


class ColorClassRegistry:
    """Sorted mapping of color class name to ``#RRGGBB``"""

    def __init__(self, palette: Palette):
        self.palette = palette
        self._classes: Dict[str, str] = {}

    @classmethod
    def from_lines(cls, lines: Iterable[List[Element]], palette: Palette) -> "ColorClassRegistry":
        registry = cls(palette)
        for line in lines:
            for element in line:
                if element.text:
                    registry.add_element(element)
        logger.debug(f"Registered {len(registry)} color classes")
        return registry

    def add(self, prefix: str, color: Color) -> str:
        name = color_class_name(prefix, color)
        if name not in self._classes:
            self._classes[name] = rgb_hex(color, self.palette)
        return name

    def add_element(self, element: Element):
        style = element.style
        if style.fg is not None:
            self.add(FG_PREFIX, style.fg)
        if style.bg is not None:
            self.add(BG_PREFIX, style.bg)
        if style.underline_color is not None:
            self.add(UNDERLINE_PREFIX, style.underline_color)

    def items(self) -> Iterator[Tuple[str, str]]:
        """(class name, rgb) pairs in ascending class-name order"""
        return iter(sorted(self._classes.items()))

    def __len__(self) -> int:
        return len(self._classes)
