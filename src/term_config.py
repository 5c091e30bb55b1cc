"""
Term Configuration - Build rendering settings from JSON files and CLI values
Loaded values are merged over the built-in defaults
"""

import json
import logging
import os
import re
from typing import Any, Dict, Optional

from ansi_style import Ansi256Color, AnsiColor, Color, RgbColor
from html_renderer import Term
from palette import get_palette

logger = logging.getLogger(__name__)

KNOWN_KEYS = ("palette", "fg_color", "bg_color", "background", "font_family", "min_width_px")

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")


class ConfigError(ValueError):
    """Raised for unreadable or invalid configuration"""


def parse_color(spec: str) -> Color:
    """
    Parse a color written as ``red`` / ``bright-red``, ``ansi256:196`` or a
    bare index ``196``, or ``#RRGGBB``
    """
    value = str(spec).strip()

    if value.startswith("#"):
        match = _HEX_RE.fullmatch(value)
        if not match:
            raise ValueError(f"Invalid RGB color: {spec!r}")
        digits = match.group(1)
        return RgbColor(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    if value.lower().startswith("ansi256:"):
        value = value.split(":", 1)[1]

    if value.isdigit():
        return Ansi256Color(int(value))

    return AnsiColor.from_name(value)


def term_from_dict(data: Dict[str, Any], base: Optional[Term] = None) -> Term:
    """Apply settings from a mapping over ``base`` (or the defaults)"""
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a JSON object, got {type(data).__name__}")

    term = base or Term()
    for key in data:
        if key not in KNOWN_KEYS:
            logger.warning(f"Ignoring unknown configuration key: {key}")

    try:
        if "palette" in data:
            term = term.with_palette(get_palette(str(data["palette"])))
        if "fg_color" in data:
            term = term.with_fg_color(parse_color(data["fg_color"]))
        if "bg_color" in data:
            term = term.with_bg_color(parse_color(data["bg_color"]))
        if "background" in data:
            if not isinstance(data["background"], bool):
                raise ValueError(f"background must be true or false, got {data['background']!r}")
            term = term.with_background(data["background"])
        if "font_family" in data:
            term = term.with_font_family(str(data["font_family"]))
        if "min_width_px" in data:
            term = term.with_min_width_px(int(data["min_width_px"]))
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e

    return term


def load_config(path: str, base: Optional[Term] = None) -> Term:
    """Load settings from a JSON file"""
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Could not load config file {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return term_from_dict(data, base)
