"""
Line Splitter - Break styled runs into display lines
"""

from typing import Iterable, List

from ansi_extractor import Element

Line = List[Element]


def split_lines(elements: Iterable[Element]) -> List[Line]:
    """
    Split elements on ``\\n`` into lines, carrying style and hyperlink onto
    each piece. A ``\\r`` right before the terminator is dropped. The last
    line is only kept when it has visible text, so a trailing terminator
    does not produce an extra empty line.
    """
    lines: List[Line] = []
    current: Line = []

    for element in elements:
        text = element.text
        start = 0
        end = text.find("\n")
        if end == -1:
            current.append(element)
            continue

        while end != -1:
            stop = end - 1 if end > start and text[end - 1] == "\r" else end
            current.append(element.with_text(text[start:stop]))
            lines.append(current)
            current = []
            start = end + 1
            end = text.find("\n", start)

        if start < len(text):
            current.append(element.with_text(text[start:]))

    if any(element.text for element in current):
        lines.append(current)

    return lines
