#!/usr/bin/env python3
"""
Tests for TextNormalizer
"""

import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from parsers.text_normalizer import TextNormalizer

class TestTextNormalizer(unittest.TestCase):
    """Test cases for TextNormalizer"""

    def test_line_breaks_are_unified_not_collapsed(self):
        text = "a\r\n\r\nb\rc\n\n\nd"

        self.assertEqual(TextNormalizer.normalize_text(text), "a\n\nb\nc\n\n\nd")

    def test_invisible_characters(self):
        text = "\ufeffhello\u200b\u00a0world\x00"

        self.assertEqual(TextNormalizer.normalize_text(text), "hello world")

    def test_bytes_input(self):
        self.assertEqual(TextNormalizer.normalize_text("café".encode('utf-8')), "café")
        self.assertEqual(TextNormalizer.normalize_text("café".encode('cp1252')), "café")

    def test_empty_values(self):
        for value in [None, "", b"", "  \n "]:
            with self.subTest(value=value):
                self.assertEqual(TextNormalizer.normalize_text(value), "")

    def test_collapse_whitespace(self):
        self.assertEqual(TextNormalizer.collapse_whitespace("  a \n\t b  "), "a b")

if __name__ == '__main__':
    unittest.main()
