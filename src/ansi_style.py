"""
ANSI Style Model - Colors and text effects for styled terminal runs
Pure value types: no parsing and no rendering happens here
"""

import enum
from dataclasses import dataclass, replace
from typing import Optional, Union


class Effects(enum.IntFlag):
    """Text effects carried by a style (SGR attributes)"""

    NONE = 0
    BOLD = 1 << 0
    DIMMED = 1 << 1
    ITALIC = 1 << 2
    UNDERLINE = 1 << 3
    DOUBLE_UNDERLINE = 1 << 4
    CURLY_UNDERLINE = 1 << 5
    DOTTED_UNDERLINE = 1 << 6
    DASHED_UNDERLINE = 1 << 7
    BLINK = 1 << 8
    INVERT = 1 << 9
    HIDDEN = 1 << 10
    STRIKETHROUGH = 1 << 11

    UNDERLINES = UNDERLINE | DOUBLE_UNDERLINE | CURLY_UNDERLINE | DOTTED_UNDERLINE | DASHED_UNDERLINE


class AnsiColor(enum.IntEnum):
    """The 16 named terminal colors"""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    @property
    def css_name(self) -> str:
        """Kebab-case name, e.g. ``bright-red``"""
        return self.name.lower().replace("_", "-")

    def bright(self) -> "AnsiColor":
        return AnsiColor(self.value | 8)

    @classmethod
    def from_name(cls, name: str) -> "AnsiColor":
        """Look up a color by ``red``, ``bright-red`` or ``BRIGHT_RED``"""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown ANSI color name: {name!r}") from None


@dataclass(frozen=True)
class Ansi256Color:
    """Index into the 256-color palette"""

    index: int

    def __post_init__(self):
        if not 0 <= self.index <= 255:
            raise ValueError(f"256-color index out of range: {self.index}")


@dataclass(frozen=True)
class RgbColor:
    """24-bit true color"""

    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range: {channel}")

    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


Color = Union[AnsiColor, Ansi256Color, RgbColor]


@dataclass(frozen=True)
class Style:
    """Foreground, background and underline colors plus effects"""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    underline_color: Optional[Color] = None
    effects: Effects = Effects.NONE

    def with_fg(self, color: Optional[Color]) -> "Style":
        return replace(self, fg=color)

    def with_bg(self, color: Optional[Color]) -> "Style":
        return replace(self, bg=color)

    def with_underline_color(self, color: Optional[Color]) -> "Style":
        return replace(self, underline_color=color)

    def insert(self, effects: Effects) -> "Style":
        return replace(self, effects=self.effects | effects)

    def remove(self, effects: Effects) -> "Style":
        return replace(self, effects=self.effects & ~effects)

    def contains(self, effect: Effects) -> bool:
        return bool(self.effects & effect)


PLAIN = Style()
