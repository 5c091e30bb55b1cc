#!/usr/bin/env python3
"""
ANSI Element Extractor - Split ANSI-annotated text into styled runs
Understands SGR color/effect sequences and OSC 8 hyperlinks; every other
escape sequence and control character is dropped
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from ansi_style import PLAIN, Ansi256Color, AnsiColor, Color, Effects, RgbColor, Style

logger = logging.getLogger(__name__)

ESC = "\x1b"
BEL = "\x07"
ST = "\x1b\\"

# Escape introducer, or a C0 control we never keep (tab, LF and CR stay in the text)
_SPECIAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_SGR_PARAMS_RE = re.compile(r"[0-9;:]*")

# Introducers of control strings terminated by ST (or BEL for OSC)
_STRING_INTRODUCERS = "]P_^X"
# First terminator of a control string: BEL or ST for OSC, ST only otherwise
_OSC_END_RE = re.compile(r"\x07|\x1b\\")
_ST_RE = re.compile(r"\x1b\\")

_UNDERLINE_VARIANTS = {
    1: Effects.UNDERLINE,
    2: Effects.DOUBLE_UNDERLINE,
    3: Effects.CURLY_UNDERLINE,
    4: Effects.DOTTED_UNDERLINE,
    5: Effects.DASHED_UNDERLINE,
}

# SGR codes that switch an effect on / off
_EFFECT_ON = {
    1: Effects.BOLD,
    2: Effects.DIMMED,
    3: Effects.ITALIC,
    5: Effects.BLINK,
    6: Effects.BLINK,
    7: Effects.INVERT,
    8: Effects.HIDDEN,
    9: Effects.STRIKETHROUGH,
}
_EFFECT_OFF = {
    22: Effects.BOLD | Effects.DIMMED,
    23: Effects.ITALIC,
    24: Effects.UNDERLINES,
    25: Effects.BLINK,
    27: Effects.INVERT,
    28: Effects.HIDDEN,
    29: Effects.STRIKETHROUGH,
}


@dataclass(frozen=True)
class Element:
    """A run of text sharing one style and one optional hyperlink"""

    style: Style
    text: str
    url: Optional[str] = None

    def with_text(self, text: str) -> "Element":
        return Element(self.style, text, self.url)


def _set_underline(style: Style, variant: Effects) -> Style:
    return style.remove(Effects.UNDERLINES).insert(variant)


def _value(group: List[Optional[int]], index: int) -> int:
    if index < len(group) and group[index] is not None:
        return group[index]
    return 0


def _make_color(mode: int, values: List[int]) -> Optional[Color]:
    if mode == 5 and len(values) >= 1:
        if 0 <= values[0] <= 255:
            return Ansi256Color(values[0])
        return None
    if mode == 2 and len(values) >= 3:
        r, g, b = values[-3:]
        if all(0 <= channel <= 255 for channel in (r, g, b)):
            return RgbColor(r, g, b)
    return None


def _colon_color(sub: List[Optional[int]]) -> Optional[Color]:
    """Extended color written with sub-parameters: ``38:5:n`` or ``38:2:[cs]:r:g:b``"""
    if not sub:
        return None
    mode = sub[0] or 0
    values = [v or 0 for v in sub[1:]]
    if mode == 2 and len(values) > 3:
        # leading color-space id
        values = values[-3:]
    return _make_color(mode, values)


def _semicolon_color(groups: List[List[Optional[int]]], start: int) -> Tuple[Optional[Color], int]:
    """Extended color written as separate parameters: ``38;5;n`` or ``38;2;r;g;b``

    Returns the color (or None) and how many parameters were consumed.
    """
    if start >= len(groups):
        return None, 0

    mode = _value(groups[start], 0)
    if mode == 5:
        needed = 1
    elif mode == 2:
        needed = 3
    else:
        return None, 1

    available = groups[start + 1:start + 1 + needed]
    values = [_value(group, 0) for group in available]
    if len(values) < needed:
        return None, 1 + len(values)
    return _make_color(mode, values), 1 + needed


def apply_sgr(style: Style, params: str) -> Style:
    """Apply the parameters of one ``ESC [ ... m`` sequence to a style"""
    if not params:
        return PLAIN

    groups = [[int(p) if p else None for p in group.split(":")] for group in params.split(";")]

    i = 0
    while i < len(groups):
        group = groups[i]
        code = _value(group, 0)
        i += 1

        if code in (38, 48, 58):
            if len(group) > 1:
                color = _colon_color(group[1:])
            else:
                color, consumed = _semicolon_color(groups, i)
                i += consumed
            if color is None:
                continue
            if code == 38:
                style = style.with_fg(color)
            elif code == 48:
                style = style.with_bg(color)
            else:
                style = style.with_underline_color(color)

        elif code == 0:
            style = PLAIN

        elif code == 4:
            variant = _value(group, 1) if len(group) > 1 else 1
            if variant == 0:
                style = style.remove(Effects.UNDERLINES)
            elif variant in _UNDERLINE_VARIANTS:
                style = _set_underline(style, _UNDERLINE_VARIANTS[variant])

        elif code == 21:
            style = _set_underline(style, Effects.DOUBLE_UNDERLINE)

        elif code in _EFFECT_ON:
            style = style.insert(_EFFECT_ON[code])

        elif code in _EFFECT_OFF:
            style = style.remove(_EFFECT_OFF[code])

        elif 30 <= code <= 37:
            style = style.with_fg(AnsiColor(code - 30))
        elif code == 39:
            style = style.with_fg(None)
        elif 40 <= code <= 47:
            style = style.with_bg(AnsiColor(code - 40))
        elif code == 49:
            style = style.with_bg(None)
        elif code == 59:
            style = style.with_underline_color(None)
        elif 90 <= code <= 97:
            style = style.with_fg(AnsiColor(code - 90).bright())
        elif 100 <= code <= 107:
            style = style.with_bg(AnsiColor(code - 100).bright())

        # Anything else (fonts, frames, overline, ...) is ignored

    return style


def _sequence_end(text: str, start: int) -> Optional[int]:
    """Index just past the escape sequence starting at ``start``

    Returns None when the sequence is cut off by the end of the text.
    """
    n = len(text)
    if start + 1 >= n:
        return None

    kind = text[start + 1]

    if kind < "\x20":
        # Lone ESC
        return start + 1

    if kind == "[":
        j = start + 2
        while j < n:
            c = text[j]
            if "\x40" <= c <= "\x7e":
                return j + 1
            if not "\x20" <= c <= "\x3f":
                # Malformed CSI: drop what we have, keep the offending character
                return j
            j += 1
        return None

    if kind in _STRING_INTRODUCERS:
        terminator_re = _OSC_END_RE if kind == "]" else _ST_RE
        match = terminator_re.search(text, start + 2)
        return match.end() if match else None

    j = start + 1
    while j < n and "\x20" <= text[j] <= "\x2f":
        j += 1
    if j >= n:
        return None
    return j + 1


def _osc_body(sequence: str) -> str:
    body = sequence[2:]
    if body.endswith(ST):
        return body[:-2]
    if body.endswith(BEL):
        return body[:-1]
    return body


class AnsiExtractor:
    """Stateful tokenizer turning ANSI text into Elements

    State (current style, open hyperlink and any escape sequence cut off at
    the end of a chunk) carries over between ``extract_next`` calls.
    """

    def __init__(self):
        self.style = PLAIN
        self.url: Optional[str] = None
        self.pending = ""

    def extract_next(self, data: Union[str, bytes]) -> Iterator[Element]:
        """Yield the Elements found in the next chunk of input"""
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")

        text = self.pending + data
        self.pending = ""

        buffer: List[str] = []
        i = 0
        n = len(text)

        while i < n:
            match = _SPECIAL_RE.search(text, i)
            if match is None:
                buffer.append(text[i:])
                break

            if match.start() > i:
                buffer.append(text[i:match.start()])
            i = match.start()

            if text[i] != ESC:
                # Bare control character
                i += 1
                continue

            end = _sequence_end(text, i)
            if end is None:
                self.pending = text[i:]
                break

            style, url = self._apply(text[i:end])
            i = end
            if style == self.style and url == self.url:
                continue

            if buffer:
                yield Element(self.style, "".join(buffer), self.url)
                buffer = []
            self.style = style
            self.url = url

        if buffer:
            yield Element(self.style, "".join(buffer), self.url)

    def _apply(self, sequence: str) -> Tuple[Style, Optional[str]]:
        if len(sequence) < 2:
            return self.style, self.url
        kind = sequence[1]

        if kind == "[" and sequence.endswith("m"):
            params = sequence[2:-1]
            if _SGR_PARAMS_RE.fullmatch(params):
                return apply_sgr(self.style, params), self.url
            return self.style, self.url

        if kind == "]":
            body = _osc_body(sequence)
            parts = body.split(";", 2)
            if parts[0] == "8" and len(parts) == 3:
                return self.style, (parts[2] or None)

        return self.style, self.url


def extract(data: Union[str, bytes]) -> Iterator[Element]:
    """Extract Elements from a complete ANSI document"""
    extractor = AnsiExtractor()
    yield from extractor.extract_next(data)
    if extractor.pending:
        logger.debug(f"Dropped incomplete escape sequence at end of input: {extractor.pending!r}")
