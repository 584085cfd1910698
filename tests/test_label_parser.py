#!/usr/bin/env python3
"""
Tests for LabelVocabulary and LabeledTextStrategy
"""

import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import Role, RoleHint
from parsers.label_parser import LabelVocabulary, LabeledTextStrategy

class TestLabelDetection(unittest.TestCase):
    """Test cases for detects_labels"""

    def setUp(self):
        self.strategy = LabeledTextStrategy(LabelVocabulary('Darko', 'Claude'))

    def test_detects_line_start_labels(self):
        """Test labels at the start of any line"""
        texts = [
            "User: hi\nClaude: hello",
            "Some preamble\nAssistant: hello",
            "USER: shouting",
            "darko: lowercase name",
            "You:no space after colon",
        ]

        for text in texts:
            with self.subTest(text=text):
                self.assertTrue(self.strategy.detects_labels(text))

    def test_ignores_labels_inside_lines(self):
        """Test label-like words that are not at a line start"""
        texts = [
            "I told the user: nothing changed",
            "Ask Claude: what is 2+2?",
            "  User: indented label",
            "Username: not a label",
            "",
        ]

        for text in texts:
            with self.subTest(text=text):
                self.assertFalse(self.strategy.detects_labels(text))

    def test_custom_names_replace_defaults(self):
        """Test that configured names are recognized and old ones are not"""
        strategy = LabeledTextStrategy(LabelVocabulary('Ana', 'Bot'))

        self.assertTrue(strategy.detects_labels("Ana: hi\nBot: hey"))
        self.assertFalse(strategy.detects_labels("Claude: hi"))

    def test_duplicate_names_are_deduplicated(self):
        """Test vocabulary when a configured name matches a base label"""
        vocabulary = LabelVocabulary('user', 'Claude')
        self.assertEqual(vocabulary.labels, ['You', 'User', 'Assistant', 'Claude'])

class TestParseLabeled(unittest.TestCase):
    """Test cases for parse_labeled"""

    def setUp(self):
        self.vocabulary = LabelVocabulary('Darko', 'Claude')
        self.strategy = LabeledTextStrategy(self.vocabulary)

    def test_synonyms_map_to_roles(self):
        """Test the label synonym table"""
        text = "Darko: What is 2+2?\nClaude: 4.\nYou: thanks\nAssistant: welcome"

        turns = self.strategy.parse_labeled(text)

        self.assertEqual(
            [t.role_hint for t in turns],
            [RoleHint.QUESTIONER, RoleHint.RESPONDER, RoleHint.QUESTIONER, RoleHint.RESPONDER]
        )
        self.assertEqual([t.content for t in turns], ["What is 2+2?", "4.", "thanks", "welcome"])

    def test_multiline_content(self):
        """Test that content runs until the next label"""
        text = "User: first line\nsecond line\n\nClaude: reply"

        turns = self.strategy.parse_labeled(text)

        self.assertEqual(turns[0].content, "first line\nsecond line")
        self.assertEqual(turns[1].content, "reply")

    def test_out_of_order_labels_are_preserved(self):
        """Test that consecutive same-role labels are not forced to alternate"""
        turns = self.strategy.parse_labeled("User: a\nUser: b\nClaude: c")

        self.assertEqual(
            [t.role_hint for t in turns],
            [RoleHint.QUESTIONER, RoleHint.QUESTIONER, RoleHint.RESPONDER]
        )

    def test_preamble_is_discarded(self):
        """Test that text before the first label is dropped"""
        turns = self.strategy.parse_labeled("Shared chat\nUser: hi\nAssistant: hello")

        self.assertEqual([t.content for t in turns], ["hi", "hello"])

    def test_empty_label_body(self):
        """Test labels with nothing after them"""
        turns = self.strategy.parse_labeled("User:\nClaude:")

        self.assertEqual(len(turns), 2)
        self.assertTrue(all(t.is_empty() for t in turns))

    def test_classify(self):
        """Test label token classification"""
        self.assertEqual(self.vocabulary.classify('YOU'), Role.QUESTIONER)
        self.assertEqual(self.vocabulary.classify('Darko'), Role.QUESTIONER)
        self.assertEqual(self.vocabulary.classify('assistant'), Role.RESPONDER)
        self.assertEqual(self.vocabulary.classify('Claude'), Role.RESPONDER)

    def test_segment_without_labels(self):
        """Test that segment reports failure on unlabeled text"""
        result = self.strategy.segment("just some text\nwith lines")

        self.assertFalse(result.success)
        self.assertEqual(result.method, "labeled")

if __name__ == '__main__':
    unittest.main()
