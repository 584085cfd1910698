#!/usr/bin/env python3
"""
Tests for TranscriptFormatter
"""

import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import Role, RoleHint, Turn
from output_formatter import TranscriptFormatter

class TestTranscriptFormatter(unittest.TestCase):
    """Test cases for TranscriptFormatter"""

    def setUp(self):
        self.formatter = TranscriptFormatter()

    def test_two_turns(self):
        """Test the basic rendering with default names"""
        turns = [Turn(Role.QUESTIONER, 'a'), Turn(Role.RESPONDER, 'b')]

        self.assertEqual(self.formatter.format_turns(turns), "Darko: a\n\nClaude: b")

    def test_configured_names(self):
        """Test names taken from configuration"""
        formatter = TranscriptFormatter({'roles': {'questioner_name': 'Me', 'responder_name': 'Bot'}})
        turns = [Turn(Role.QUESTIONER, 'a'), Turn(Role.RESPONDER, 'b')]

        self.assertEqual(formatter.format_turns(turns), "Me: a\n\nBot: b")

    def test_content_is_trimmed(self):
        turns = [Turn(Role.QUESTIONER, '  hi \n')]

        self.assertEqual(self.formatter.format_turns(turns), "Darko: hi")

    def test_empty_turns_are_dropped(self):
        """Test that empty content is skipped rather than rendered as a bare label"""
        turns = [
            Turn(Role.QUESTIONER, 'a'),
            Turn(Role.RESPONDER, '   '),
            Turn(Role.QUESTIONER, 'c'),
        ]

        self.assertEqual(self.formatter.format_turns(turns), "Darko: a\n\nDarko: c")

    def test_all_empty_renders_empty_string(self):
        turns = [Turn(Role.QUESTIONER, ''), Turn(Role.RESPONDER, '\n')]

        self.assertEqual(self.formatter.format_turns(turns), "")

    def test_unknown_hints_alternate(self):
        """Test positional roles, skipping empty turns when counting"""
        turns = [
            Turn(RoleHint.UNKNOWN, 'a'),
            Turn(RoleHint.UNKNOWN, ''),
            Turn(RoleHint.UNKNOWN, 'c'),
            Turn(RoleHint.UNKNOWN, 'd'),
        ]

        self.assertEqual(
            self.formatter.format_turns(turns),
            "Darko: a\n\nClaude: c\n\nDarko: d"
        )

    def test_no_leading_or_trailing_blank_lines(self):
        rendered = self.formatter.format_turns([Turn(Role.RESPONDER, '\n\nx\n\n')])

        self.assertEqual(rendered, "Claude: x")

if __name__ == '__main__':
    unittest.main()
