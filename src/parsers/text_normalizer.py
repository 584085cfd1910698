#!/usr/bin/env python3
"""
Text Normalizer for Chat Transcript Formatter
Cleans pasted or scraped text before segmentation without touching line structure.
"""

import re
import unicodedata
import logging
from typing import Union

logger = logging.getLogger(__name__)

class TextNormalizer:
    """Input text normalization and encoding handler"""

    # Characters that never carry meaning in a transcript
    INVISIBLE_CHARS = {
        '\x00': '',
        '\u200b': '',  # zero-width space
        '\u200c': '',  # zero-width non-joiner
        '\u200d': '',  # zero-width joiner
        '\ufeff': '',  # byte order mark
        '\u00a0': ' ', # non-breaking space
    }

    @staticmethod
    def normalize_text(text: Union[str, bytes, None]) -> str:
        """
        Normalize raw transcript text

        Line breaks are kept (only their style is unified), since runs of
        newlines are what the segmenters split on.

        Args:
            text: Input text as str or bytes

        Returns:
            Normalized, trimmed string
        """
        if not text:
            return ""

        if isinstance(text, bytes):
            text = TextNormalizer.decode_bytes(text)

        text = str(text)

        for old, new in TextNormalizer.INVISIBLE_CHARS.items():
            text = text.replace(old, new)

        text = unicodedata.normalize('NFC', text)
        text = TextNormalizer.normalize_line_breaks(text)

        return text.strip()

    @staticmethod
    def normalize_line_breaks(text: str) -> str:
        """Convert CRLF and lone CR line endings to LF"""
        text = re.sub(r'\r\n', '\n', text)
        return re.sub(r'\r', '\n', text)

    @staticmethod
    def decode_bytes(data: bytes) -> str:
        """Decode bytes to string with fallback encodings"""
        encodings = ['utf-8-sig', 'utf-8', 'cp1252', 'latin-1']

        for encoding in encodings:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                logger.debug(f"Input is not valid {encoding}, trying next encoding")
                continue

        return data.decode('utf-8', errors='replace')

    @staticmethod
    def collapse_whitespace(text: str) -> str:
        """Collapse all whitespace runs into single spaces (for HTML block text)"""
        if not text:
            return ""
        return ' '.join(text.split())
