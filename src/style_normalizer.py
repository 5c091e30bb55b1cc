"""
Style Normalizer - Resolve reverse video and collect the effects in use
"""

import logging
from typing import Iterable, List, Tuple

from ansi_extractor import Element
from ansi_style import Color, Effects, Style

logger = logging.getLogger(__name__)


def resolve_invert(style: Style, default_fg: Color, default_bg: Color) -> Style:
    """
    Turn INVERT into explicit colors
    The foreground takes the old background (or the default background) and
    the background takes the old foreground (or the default foreground)
    """
    if not style.contains(Effects.INVERT):
        return style

    fg = style.bg if style.bg is not None else default_bg
    bg = style.fg if style.fg is not None else default_fg
    return Style(
        fg=fg,
        bg=bg,
        underline_color=style.underline_color,
        effects=style.effects & ~Effects.INVERT,
    )


def collect_effects(elements: Iterable[Element]) -> Effects:
    """Union of the effects of elements that have text"""
    effects = Effects.NONE
    for element in elements:
        if element.text:
            effects |= element.style.effects
    return effects


def normalize_elements(
    elements: Iterable[Element], default_fg: Color, default_bg: Color
) -> Tuple[List[Element], Effects]:
    """Resolve INVERT on every element and return them with the union of their effects"""
    normalized = []

    for element in elements:
        style = resolve_invert(element.style, default_fg, default_bg)
        if style is not element.style:
            element = Element(style, element.text, element.url)
        normalized.append(element)

    effects_in_use = collect_effects(normalized)
    logger.debug(f"Normalized {len(normalized)} elements, effects in use: {effects_in_use!r}")
    return normalized, effects_in_use
