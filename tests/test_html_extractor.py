#!/usr/bin/env python3
"""
Tests for HTMLPageExtractor
"""

import json
import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bs4 import BeautifulSoup

from models import RoleHint
from parsers.document_extractor import DocumentExtractor
from parsers.html_extractor import HTMLPageExtractor

MESSAGES = {
    'messages': [
        {'role': 'user', 'content': 'hi'},
        {'role': 'assistant', 'content': 'hello'},
    ]
}

class TestHTMLPageExtractor(unittest.TestCase):
    """Test cases for HTMLPageExtractor"""

    def setUp(self):
        self.extractor = HTMLPageExtractor(DocumentExtractor())

    def test_next_data_script(self):
        """Test embedded Next.js page data"""
        document = {'props': {'pageProps': {'conversation': MESSAGES}}}
        html = (
            '<html><head><script id="__NEXT_DATA__" type="application/json">'
            f'{json.dumps(document)}</script></head><body></body></html>'
        )

        page = self.extractor.extract(html)

        self.assertTrue(page.result.success)
        self.assertEqual(page.result.method, "known_path")
        self.assertEqual([t.content for t in page.result.turns], ['hi', 'hello'])

    def test_initial_state_assignment(self):
        """Test a window.__INITIAL_STATE__ assignment"""
        html = (
            '<html><body><script>window.__INITIAL_STATE__ = '
            f'{json.dumps({"chat": MESSAGES})};</script></body></html>'
        )

        page = self.extractor.extract(html)

        self.assertTrue(page.result.success)
        self.assertEqual(len(page.result.turns), 2)

    def test_malformed_embedded_json_falls_through(self):
        """Test that undecodable page data moves on to message blocks"""
        html = (
            '<html><body>'
            '<script id="__NEXT_DATA__">{not json</script>'
            '<div class="chat-message">Hello there, how are you?</div>'
            '<div class="chat-message">I am fine, thank you for asking.</div>'
            '</body></html>'
        )

        page = self.extractor.extract(html)

        self.assertEqual(page.result.method, "html_blocks")
        self.assertEqual(
            [t.content for t in page.result.turns],
            ['Hello there, how are you?', 'I am fine, thank you for asking.']
        )
        self.assertTrue(all(t.role_hint == RoleHint.UNKNOWN for t in page.result.turns))

    def test_short_blocks_are_ignored(self):
        """Test the minimum block length"""
        html = '<article>ok</article><article>This is a longer article body</article>'

        page = self.extractor.extract(html)

        self.assertEqual([t.content for t in page.result.turns], ['This is a longer article body'])

    def test_raw_text_fallback(self):
        """Test that visible text is handed back when nothing structured exists"""
        html = (
            '<html><head><style>p { color: red; }</style></head><body>'
            '<p>What is the capital of France? I need it for a quiz tomorrow.</p>'
            '<p>The capital of France is Paris. It is also its largest city.</p>'
            '</body></html>'
        )

        page = self.extractor.extract(html)

        self.assertFalse(page.result.success)
        self.assertEqual(
            page.raw_text,
            'What is the capital of France? I need it for a quiz tomorrow.\n'
            'The capital of France is Paris. It is also its largest city.'
        )
        self.assertTrue(page.found_anything)

    def test_nothing_found(self):
        """Test a page with too little text"""
        page = self.extractor.extract('<html><body><p>short</p></body></html>')

        self.assertFalse(page.found_anything)

    def test_find_embedded_documents_skips_bad_blobs(self):
        """Test that one bad blob does not hide a good one"""
        html = (
            '<script id="__NEXT_DATA__">{"broken": </script>'
            '<script>window.__data = {"messages": []};</script>'
        )
        soup = BeautifulSoup(html, 'html.parser')

        documents = self.extractor.find_embedded_documents(soup)

        self.assertEqual(documents, [{'messages': []}])

    def test_nested_wrapper_blocks(self):
        """Test that a matching wrapper does not become a turn of its own"""
        html = (
            '<div class="messages-list">'
            '<div class="message">Hello there, how are you?</div>'
            '<div class="message">I am fine, thank you for asking.</div>'
            '</div>'
        )

        page = self.extractor.extract(html)

        self.assertEqual(
            [t.content for t in page.result.turns],
            ['Hello there, how are you?', 'I am fine, thank you for asking.']
        )

    def test_deeply_nested_embedded_json_is_skipped(self):
        """Test that a blob too deep to decode is abandoned"""
        deep = "[" * 100000 + "]" * 100000
        html = (
            f'<script id="__NEXT_DATA__">{deep}</script>'
            '<script>window.__data = {"messages": []};</script>'
        )
        soup = BeautifulSoup(html, 'html.parser')

        documents = self.extractor.find_embedded_documents(soup)

        self.assertEqual(documents, [{'messages': []}])

if __name__ == '__main__':
    unittest.main()
