#!/usr/bin/env python3
"""Tests for color_classes module."""

import unittest

from ansi_extractor import Element
from ansi_style import PLAIN, Ansi256Color, AnsiColor, RgbColor, Style
from color_classes import BG_PREFIX, FG_PREFIX, UNDERLINE_PREFIX, ColorClassRegistry, color_class_name
from palette import VGA, WIN10_CONSOLE


class TestColorClassName(unittest.TestCase):
    """Test cases for class naming."""

    def test_named_colors(self):
        """Test named colors use their kebab-case name"""
        self.assertEqual(color_class_name(FG_PREFIX, AnsiColor.BRIGHT_RED), "fg-bright-red")
        self.assertEqual(color_class_name(BG_PREFIX, AnsiColor.BLACK), "bg-black")

    def test_256_colors(self):
        """Test 256-color indices are zero padded"""
        self.assertEqual(color_class_name(BG_PREFIX, Ansi256Color(7)), "bg-ansi256-007")
        self.assertEqual(color_class_name(FG_PREFIX, Ansi256Color(196)), "fg-ansi256-196")

    def test_rgb_colors(self):
        """Test RGB colors use uppercase hex"""
        self.assertEqual(color_class_name(UNDERLINE_PREFIX, RgbColor(10, 11, 255)), "underline-rgb-0A0BFF")


class TestColorClassRegistry(unittest.TestCase):
    """Test cases for the registry."""

    def test_collects_all_roles(self):
        """Test fg, bg and underline colors are all registered"""
        style = Style(fg=AnsiColor.RED, bg=Ansi256Color(21), underline_color=RgbColor(1, 2, 3))
        registry = ColorClassRegistry.from_lines([[Element(style, "x")]], VGA)
        self.assertEqual(list(registry.items()), [
            ("bg-ansi256-021", "#0000FF"),
            ("fg-red", "#AA0000"),
            ("underline-rgb-010203", "#010203"),
        ])

    def test_deduplicates(self):
        """Test repeated colors produce one entry"""
        red = Style(fg=AnsiColor.RED)
        lines = [[Element(red, "a"), Element(red, "b")], [Element(red, "c")]]
        registry = ColorClassRegistry.from_lines(lines, WIN10_CONSOLE)
        self.assertEqual(len(registry), 1)
        self.assertEqual(dict(registry.items()), {"fg-red": "#C50F1F"})

    def test_same_color_different_roles(self):
        """Test one color in two roles gives two classes"""
        style = Style(fg=AnsiColor.GREEN, bg=AnsiColor.GREEN)
        registry = ColorClassRegistry.from_lines([[Element(style, "x")]], VGA)
        self.assertEqual(dict(registry.items()), {"bg-green": "#00AA00", "fg-green": "#00AA00"})
        self.assertEqual(len(registry), 2)

    def test_sorted_order(self):
        """Test iteration is by class name regardless of insertion order"""
        lines = [[
            Element(Style(fg=AnsiColor.YELLOW), "a"),
            Element(Style(fg=AnsiColor.BLUE), "b"),
            Element(Style(bg=AnsiColor.RED), "c"),
        ]]
        registry = ColorClassRegistry.from_lines(lines, VGA)
        names = [name for name, _ in registry.items()]
        self.assertEqual(names, ["bg-red", "fg-blue", "fg-yellow"])

    def test_plain_elements(self):
        """Test elements without colors register nothing"""
        registry = ColorClassRegistry.from_lines([[Element(PLAIN, "x")]], VGA)
        self.assertEqual(len(registry), 0)
        self.assertEqual(list(registry.items()), [])

    def test_empty_elements_ignored(self):
        """Test elements without text register no colors"""
        lines = [[Element(Style(fg=AnsiColor.RED), ""), Element(Style(bg=AnsiColor.BLUE), "x")]]
        registry = ColorClassRegistry.from_lines(lines, VGA)
        self.assertEqual(dict(registry.items()), {"bg-blue": "#0000AA"})


if __name__ == "__main__":
    unittest.main()
