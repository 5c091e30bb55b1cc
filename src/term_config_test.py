#!/usr/bin/env python3
"""Tests for term_config module."""

import json
import os
import tempfile
import unittest

from ansi_style import Ansi256Color, AnsiColor, RgbColor
from html_renderer import Term
from palette import VGA, XTERM
from term_config import ConfigError, load_config, parse_color, term_from_dict


class TestParseColor(unittest.TestCase):
    """Test cases for color specs."""

    def test_names(self):
        """Test named colors"""
        self.assertEqual(parse_color("red"), AnsiColor.RED)
        self.assertEqual(parse_color("bright-black"), AnsiColor.BRIGHT_BLACK)

    def test_indices(self):
        """Test 256-color indices with and without prefix"""
        self.assertEqual(parse_color("196"), Ansi256Color(196))
        self.assertEqual(parse_color("ansi256:21"), Ansi256Color(21))
        self.assertEqual(parse_color(7), Ansi256Color(7))

    def test_rgb(self):
        """Test hex colors"""
        self.assertEqual(parse_color("#ff8000"), RgbColor(255, 128, 0))

    def test_invalid(self):
        """Test invalid specs raise ValueError"""
        for spec in ("#12345", "#GGGGGG", "mauve", "256"):
            with self.assertRaises(ValueError, msg=spec):
                parse_color(spec)


class TestTermFromDict(unittest.TestCase):
    """Test cases for applying settings."""

    def test_all_keys(self):
        """Test every supported setting"""
        term = term_from_dict({
            "palette": "vga",
            "fg_color": "bright-white",
            "bg_color": "#101010",
            "background": False,
            "font_family": "monospace",
            "min_width_px": 640,
        })
        self.assertEqual(term, Term(
            palette=VGA,
            fg_color=AnsiColor.BRIGHT_WHITE,
            bg_color=RgbColor(16, 16, 16),
            background=False,
            font_family="monospace",
            min_width_px=640,
        ))

    def test_merges_over_base(self):
        """Test missing keys keep the base values"""
        base = Term().with_palette(XTERM)
        term = term_from_dict({"fg_color": "green"}, base)
        self.assertEqual(term.palette, XTERM)
        self.assertEqual(term.fg_color, AnsiColor.GREEN)
        self.assertEqual(term.bg_color, AnsiColor.BLACK)

    def test_unknown_keys_warn(self):
        """Test unknown keys are ignored with a warning"""
        with self.assertLogs("term_config", level="WARNING") as logs:
            term = term_from_dict({"theme": "dark"})
        self.assertEqual(term, Term())
        self.assertIn("theme", logs.output[0])

    def test_invalid_values(self):
        """Test invalid values raise ConfigError"""
        for data in ({"palette": "nope"}, {"fg_color": "mauve"}, {"background": "yes"},
                     {"min_width_px": "wide"}):
            with self.assertRaises(ConfigError, msg=str(data)):
                term_from_dict(data)

    def test_not_an_object(self):
        """Test non-object configuration is rejected"""
        with self.assertRaises(ConfigError):
            term_from_dict(["palette", "vga"])


class TestLoadConfig(unittest.TestCase):
    """Test cases for loading config files."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "term.json")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load(self):
        """Test loading a config file"""
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"palette": "vga", "background": False}, f)
        term = load_config(self.path)
        self.assertEqual(term.palette, VGA)
        self.assertFalse(term.background)

    def test_missing_file(self):
        """Test a missing file raises ConfigError"""
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_invalid_json(self):
        """Test broken JSON raises ConfigError"""
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(ConfigError):
            load_config(self.path)


if __name__ == "__main__":
    unittest.main()
