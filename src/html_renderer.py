#!/usr/bin/env python3
"""
HTML Renderer - Render ANSI terminal output as a static HTML document

Lines with background colors get an extra overlay row made of block
characters painted in the background color, so backgrounds line up with the
text row below without duplicating the text itself.
"""

import html
import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Union

from wcwidth import wcwidth

from ansi_extractor import Element, extract
from ansi_style import AnsiColor, Color, Effects
from color_classes import (
    BG_PREFIX,
    FG_PREFIX,
    UNDERLINE_PREFIX,
    ColorClassRegistry,
    bg_class,
    fg_class,
    underline_class,
)
from line_splitter import Line, split_lines
from palette import WIN10_CONSOLE, Palette, rgb_hex
from style_normalizer import collect_effects, normalize_elements

logger = logging.getLogger(__name__)

FG = "fg"
BG = "bg"

DEFAULT_FG_COLOR: Color = AnsiColor.WHITE
DEFAULT_BG_COLOR: Color = AnsiColor.BLACK
DEFAULT_FONT_FAMILY = "SFMono-Regular, Consolas, Liberation Mono, Menlo, monospace"
DEFAULT_MIN_WIDTH_PX = 720

LINE_HEIGHT_PX = 18
BLOCK_FILL = "█"

# CSS rule per effect, in the order rules appear in <head>
EFFECT_RULES = [
    (Effects.BOLD, "bold", "font-weight: bold;"),
    (Effects.ITALIC, "italic", "font-style: italic;"),
    (Effects.UNDERLINE, "underline", "text-decoration-line: underline;"),
    (Effects.DOUBLE_UNDERLINE, "double-underline",
     "text-decoration-line: underline; text-decoration-style: double;"),
    (Effects.CURLY_UNDERLINE, "curly-underline",
     "text-decoration-line: underline; text-decoration-style: wavy;"),
    (Effects.DOTTED_UNDERLINE, "dotted-underline",
     "text-decoration-line: underline; text-decoration-style: dotted;"),
    (Effects.DASHED_UNDERLINE, "dashed-underline",
     "text-decoration-line: underline; text-decoration-style: dashed;"),
    (Effects.STRIKETHROUGH, "strikethrough", "text-decoration-line: line-through;"),
    (Effects.DIMMED, "dimmed", "opacity: 0.7;"),
    (Effects.HIDDEN, "hidden", "opacity: 0;"),
]

# Order of effect classes on a text span
SPAN_EFFECT_CLASSES = [
    (Effects.UNDERLINE, "underline"),
    (Effects.DOUBLE_UNDERLINE, "double-underline"),
    (Effects.CURLY_UNDERLINE, "curly-underline"),
    (Effects.DOTTED_UNDERLINE, "dotted-underline"),
    (Effects.DASHED_UNDERLINE, "dashed-underline"),
    (Effects.STRIKETHROUGH, "strikethrough"),
    (Effects.BOLD, "bold"),
    (Effects.ITALIC, "italic"),
    (Effects.DIMMED, "dimmed"),
    (Effects.HIDDEN, "hidden"),
]

Extractor = Callable[[Union[str, bytes]], Iterable[Element]]


def display_width(text: str) -> int:
    """Number of terminal columns the text occupies"""
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w > 0:
            width += w
    return width


def _span(classes: List[str], content: str) -> str:
    if classes:
        return f'<span class="{" ".join(classes)}">{content}</span>'
    return f"<span>{content}</span>"


def write_fg_span(buffer: List[str], element: Element):
    """Text span: color classes, effect classes, escaped text, optional link"""
    classes = []
    fg = fg_class(element)
    if fg:
        classes.append(fg)
    underline = underline_class(element)
    if underline:
        classes.append(underline)
    for effect, name in SPAN_EFFECT_CLASSES:
        if element.style.contains(effect):
            classes.append(name)

    content = html.escape(element.text, quote=False)
    if element.url is not None:
        content = f'<a href="{html.escape(element.url)}">{content}</a>'
    buffer.append(_span(classes, content))


def write_bg_span(buffer: List[str], element: Element):
    """Overlay span: block characters in the background color, one per column"""
    bg = bg_class(element)
    fill = BLOCK_FILL if bg else " "
    classes = [bg] if bg else []
    buffer.append(_span(classes, fill * display_width(element.text)))


def _color_rule(name: str, rgb: str) -> Optional[str]:
    if name.startswith(f"{FG_PREFIX}-"):
        return f"    .{name} {{ color: {rgb} }}"
    if name.startswith(f"{BG_PREFIX}-"):
        return f"    .{name} {{ background: {rgb}; user-select: none; }}"
    if name.startswith(f"{UNDERLINE_PREFIX}-"):
        return f"    .{name} {{ text-decoration-line: underline; text-decoration-color: {rgb} }}"
    return None


@dataclass(frozen=True)
class Term:
    """Terminal-like settings used for rendering"""

    palette: Palette = WIN10_CONSOLE
    fg_color: Color = DEFAULT_FG_COLOR
    bg_color: Color = DEFAULT_BG_COLOR
    background: bool = True
    font_family: str = DEFAULT_FONT_FAMILY
    # Layout hint, accepted but not used by the renderer
    min_width_px: int = DEFAULT_MIN_WIDTH_PX

    def with_palette(self, palette: Palette) -> "Term":
        return replace(self, palette=palette)

    def with_fg_color(self, color: Color) -> "Term":
        return replace(self, fg_color=color)

    def with_bg_color(self, color: Color) -> "Term":
        return replace(self, bg_color=color)

    def with_background(self, yes: bool) -> "Term":
        return replace(self, background=yes)

    def with_font_family(self, font_family: str) -> "Term":
        return replace(self, font_family=font_family)

    def with_min_width_px(self, px: int) -> "Term":
        return replace(self, min_width_px=px)

    def render_html(self, ansi: Union[str, bytes], extractor: Extractor = extract) -> str:
        """Render ANSI text as a complete HTML document"""
        elements, _ = normalize_elements(extractor(ansi), self.fg_color, self.bg_color)
        lines = split_lines(elements)
        # Only pieces left with text after splitting become spans
        effects_in_use = collect_effects(element for line in lines for element in line)
        registry = ColorClassRegistry.from_lines(lines, self.palette)
        logger.debug(
            f"Rendering {len(lines)} lines with {len(registry)} color classes "
            f"(min width {self.min_width_px}px is not applied)"
        )
        return self.render_document(lines, registry, effects_in_use)

    def render_document(self, lines: List[Line], registry: ColorClassRegistry, effects_in_use: Effects) -> str:
        """Emit the document for already normalized lines"""
        fg_color = rgb_hex(self.fg_color, self.palette)
        bg_color = rgb_hex(self.bg_color, self.palette)

        out = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '  <meta charset="UTF-8">',
            '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
            '  <meta http-equiv="X-UA-Compatible" content="ie=edge">',
            "  <style>",
            f"    .{FG} {{ color: {fg_color} }}",
            f"    .{BG} {{ background: {bg_color} }}",
        ]
        for name, rgb in registry.items():
            rule = _color_rule(name, rgb)
            if rule:
                out.append(rule)
        out.extend([
            "    .container {",
            f"      line-height: {LINE_HEIGHT_PX}px;",
            "    }",
        ])
        for effect, name, css in EFFECT_RULES:
            if effects_in_use & effect:
                out.append(f"    .{name} {{ {css} }}")
        out.extend([
            "    span {",
            f"      font: 14px {self.font_family};",
            "      white-space: pre;",
            f"      line-height: {LINE_HEIGHT_PX}px;",
            "    }",
            "  </style>",
            "</head>",
            "",
            f'<body class="{BG}">' if self.background else "<body>",
            "",
            f'  <div class="container {FG}">',
        ])

        for line in lines:
            visible = [element for element in line if element.text]
            if any(element.style.bg is not None for element in visible):
                row: List[str] = []
                for element in visible:
                    write_bg_span(row, element)
                out.append("".join(row) + "<br />")

            row = []
            for element in visible:
                write_fg_span(row, element)
            out.append("".join(row) + "<br />")

        out.extend([
            "  </div>",
            "",
            "</body>",
            "</html>",
        ])
        return "\n".join(out) + "\n"


def render_html(ansi: Union[str, bytes], term: Optional[Term] = None, extractor: Extractor = extract) -> str:
    """Render with the given settings, or the defaults"""
    return (term or Term()).render_html(ansi, extractor=extractor)
