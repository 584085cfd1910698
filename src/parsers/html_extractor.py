#!/usr/bin/env python3
"""
HTML-based Extraction Components for Chat Transcript Formatter
Pulls conversation data out of a shared conversation page: embedded JSON
first, then message-like content blocks, then the page's plain text.
"""

import json
import re
import logging
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from models import RoleHint, Turn
from parsers.common import ExtractionResult
from parsers.document_extractor import DocumentExtractor
from parsers.text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)

STATE_ASSIGNMENT_PATTERNS = [
    ('__INITIAL_STATE__', re.compile(r'window\.__INITIAL_STATE__\s*=\s*({.*})\s*;?\s*$', re.DOTALL)),
    ('__data', re.compile(r'window\.__data\s*=\s*({.*})\s*;?\s*$', re.DOTALL)),
]

MESSAGE_BLOCK_SELECTORS = [
    'div[class*="message"]',
    'div[data-role="message"]',
    'article',
]

class PageExtraction:
    """Result of scanning a page: turns, or raw text left for the segmenters"""

    def __init__(self, result: ExtractionResult, raw_text: Optional[str] = None):
        self.result = result
        self.raw_text = raw_text

    @property
    def found_anything(self) -> bool:
        return self.result.success or bool(self.raw_text)

class HTMLPageExtractor:
    """Extract a conversation from shared-page markup"""

    def __init__(self, document_extractor: DocumentExtractor,
                 min_block_length: int = 10, min_raw_text_length: int = 100):
        self.document_extractor = document_extractor
        self.min_block_length = min_block_length
        self.min_raw_text_length = min_raw_text_length

    def extract(self, markup: str) -> PageExtraction:
        """
        Extract from page markup

        Args:
            markup: Page HTML

        Returns:
            PageExtraction holding turns, or raw page text when only that
            could be recovered, or neither
        """
        soup = BeautifulSoup(markup or "", 'html.parser')

        for document in self.find_embedded_documents(soup):
            result = self.document_extractor.extract(document)
            if result.success:
                logger.info(f"Embedded JSON yielded {len(result.turns)} turns via {result.method}")
                return PageExtraction(result)

        result = self.extract_message_blocks(soup)
        if result.success:
            logger.info(f"Found {len(result.turns)} message blocks in page markup")
            return PageExtraction(result)

        raw_text = self.extract_raw_text(soup)
        if raw_text:
            logger.info(f"Falling back to {len(raw_text)} characters of page text")
            return PageExtraction(ExtractionResult([], method="raw_text"), raw_text=raw_text)

        logger.warning("No conversation structure found in page")
        return PageExtraction(ExtractionResult([], method=None))

    def find_embedded_documents(self, soup: BeautifulSoup) -> List[Any]:
        """Decode every embedded JSON state blob; undecodable blobs are skipped"""
        candidates = []

        next_data = soup.find('script', id='__NEXT_DATA__')
        if next_data and next_data.string:
            candidates.append(('__NEXT_DATA__', next_data.string))

        for script in soup.find_all('script'):
            if not script.string:
                continue
            content = script.string.strip()
            for source, pattern in STATE_ASSIGNMENT_PATTERNS:
                match = pattern.search(content)
                if match:
                    candidates.append((source, match.group(1)))
                    break

        documents = []
        for source, blob in candidates:
            try:
                documents.append(json.loads(blob))
            except json.JSONDecodeError as e:
                logger.debug(f"Embedded data from {source} is not valid JSON: {e}")
                continue
            except RecursionError:
                logger.debug(f"Embedded data from {source} is nested too deeply to decode")
                continue

        logger.debug(f"Decoded {len(documents)} of {len(candidates)} embedded JSON blobs")
        return documents

    def extract_message_blocks(self, soup: BeautifulSoup) -> ExtractionResult:
        """Turns from message-like elements; roles are left to position"""
        for selector in MESSAGE_BLOCK_SELECTORS:
            elements = soup.select(selector)
            if not elements:
                continue

            turns = []
            for element in elements:
                # Wrappers such as "messages-list" also match; keep the innermost blocks
                if element.select_one(selector):
                    continue
                content = TextNormalizer.collapse_whitespace(element.get_text(' '))
                if len(content) > self.min_block_length:
                    turns.append(Turn(RoleHint.UNKNOWN, content))

            if turns:
                logger.debug(f"Selector {selector} matched {len(turns)} blocks")
                return ExtractionResult(turns, method="html_blocks")

        return ExtractionResult([], method="html_blocks")

    def extract_raw_text(self, soup: BeautifulSoup) -> Optional[str]:
        """Visible page text, one line per text node, or None when there is too little of it"""
        for tag in soup(['script', 'style']):
            tag.decompose()

        lines = [
            TextNormalizer.collapse_whitespace(line)
            for line in soup.get_text('\n').splitlines()
        ]
        text = '\n'.join(line for line in lines if line)
        if len(text) > self.min_raw_text_length:
            return text
        return None
