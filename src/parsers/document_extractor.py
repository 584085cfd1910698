#!/usr/bin/env python3
"""
Document Extractor for Chat Transcript Formatter
Locates the array of message records inside an arbitrarily shaped decoded
document (embedded page JSON, API payloads, exports) without relying on a
fixed schema.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from models import Role, Turn
from parsers.common import ExtractionResult

logger = logging.getLogger(__name__)

SPEAKER_FIELDS = ['role', 'sender', 'speaker', 'author']
CONTENT_FIELDS = ['content', 'text', 'completion', 'message']
PART_TEXT_FIELDS = ['text', 'content', 'value']

KNOWN_MESSAGE_PATHS = [
    ['conversation', 'messages'],
    ['conversation', 'chat_messages'],
    ['messages'],
    ['chat_messages'],
    ['chat', 'messages'],
    ['data', 'conversation', 'messages'],
    ['state', 'conversation', 'messages'],
    ['props', 'pageProps', 'conversation', 'messages'],
    ['props', 'pageProps', 'conversation', 'chat_messages'],
    ['props', 'pageProps', 'messages'],
]

class NodeKind(Enum):
    """Variants of a decoded JSON value"""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    MAP = "map"

def node_kind(value: Any) -> NodeKind:
    """
    Classify a decoded document value

    Raises:
        TypeError: If the value is not something a JSON decoder produces
    """
    if value is None:
        return NodeKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    if isinstance(value, dict):
        return NodeKind.MAP
    raise TypeError(f"Unsupported document value of type {type(value).__name__}")

def classify_speaker(speaker: Optional[str], index: int, responder_name: str) -> Role:
    """
    Best-effort role from a free-text speaker field

    Keyword containment only; anything unrecognized falls back to strict
    alternation on the record's position.
    """
    if speaker:
        if 'assistant' in speaker or (responder_name and responder_name.lower() in speaker):
            return Role.RESPONDER
        if 'user' in speaker or 'human' in speaker:
            return Role.QUESTIONER
    return Role.for_position(index)

class DocumentExtractor:
    """Find and normalize message records in a decoded document tree"""

    def __init__(self, responder_name: str = 'Claude', max_depth: int = 20):
        self.responder_name = responder_name
        self.max_depth = max_depth

    def extract(self, document: Any) -> ExtractionResult:
        """
        Extract turns from a decoded document

        Strategies are tried in order and the first that yields turns wins:
        known paths, then a structural search.

        Args:
            document: Decoded JSON value (dict or list at the root)

        Returns:
            ExtractionResult; empty when no message array was found
        """
        records = self.probe_known_paths(document)
        if records:
            turns = self.normalize_records(records)
            if turns:
                return ExtractionResult(turns, method="known_path")
            logger.debug("Array at known path held no usable records")

        records = self.search_structure(document)
        if records:
            turns = self.normalize_records(records)
            if turns:
                return ExtractionResult(turns, method="structural_search")
            logger.debug("Array found by structural search held no usable records")

        return ExtractionResult([], method=None)

    def probe_known_paths(self, document: Any) -> Optional[List[Any]]:
        """Return the first non-empty array found at a known path"""
        for path in KNOWN_MESSAGE_PATHS:
            current = document
            for key in path:
                if node_kind(current) != NodeKind.MAP or key not in current:
                    current = None
                    break
                current = current[key]

            if current is not None and node_kind(current) == NodeKind.ARRAY and current:
                logger.debug(f"Found messages at path: {' -> '.join(path)}")
                return list(current)
        return None

    def search_structure(self, node: Any, depth: int = 0) -> Optional[List[Any]]:
        """
        Depth-first search for the first array that looks like message records

        At every level, candidate arrays are tested before any child is
        descended into. The first match is returned.
        """
        if depth > self.max_depth:
            return None

        kind = node_kind(node)

        if kind == NodeKind.ARRAY:
            if self._looks_like_records(node):
                logger.debug(f"Found message-like array at depth {depth}")
                return list(node)
            for item in node:
                found = self.search_structure(item, depth + 1)
                if found:
                    return found

        elif kind == NodeKind.MAP:
            values = list(node.values())
            for key, value in node.items():
                if isinstance(value, (list, tuple)) and self._looks_like_records(value):
                    logger.debug(f"Found message-like array under key '{key}' at depth {depth + 1}")
                    return list(value)
            for value in values:
                found = self.search_structure(value, depth + 1)
                if found:
                    return found

        return None

    def _looks_like_records(self, array: List[Any]) -> bool:
        if not array:
            return False
        first = array[0]
        if not isinstance(first, dict):
            return False
        has_speaker = any(first.get(field) for field in SPEAKER_FIELDS)
        has_content = any(first.get(field) for field in CONTENT_FIELDS)
        return has_speaker and has_content

    def normalize_records(self, records: List[Any]) -> List[Turn]:
        """Convert raw records to turns, dropping records with no content"""
        turns = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue

            content = self.extract_content(record)
            if not content:
                continue

            role = classify_speaker(self.extract_speaker(record), index, self.responder_name)
            turns.append(Turn(role, content))

        dropped = len(records) - len(turns)
        if dropped:
            logger.debug(f"Dropped {dropped} records without extractable content")
        return turns

    def extract_content(self, record: Dict[str, Any], depth: int = 0) -> str:
        """Pull the message text out of a record, trying known layouts in order"""
        for key in ('text', 'completion'):
            value = record.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

        content = record.get('content')
        if isinstance(content, str) and content.strip():
            return content.strip()
        if isinstance(content, list):
            joined = self._join_parts(content)
            if joined:
                return joined
        if isinstance(content, dict) and isinstance(content.get('parts'), list):
            joined = self._join_parts(content['parts'])
            if joined:
                return joined

        message = record.get('message')
        if isinstance(message, dict) and depth < self.max_depth:
            return self.extract_content(message, depth + 1)
        if isinstance(message, str):
            return message.strip()

        return ""

    def _join_parts(self, parts: List[Any]) -> str:
        texts = []
        for part in parts:
            if isinstance(part, str):
                text = part
            elif isinstance(part, dict):
                text = next(
                    (part[key] for key in PART_TEXT_FIELDS if isinstance(part.get(key), str)),
                    ""
                )
            else:
                continue
            if text.strip():
                texts.append(text.strip())
        return '\n'.join(texts)

    def extract_speaker(self, record: Dict[str, Any]) -> Optional[str]:
        """First string-valued speaker field, lowercased"""
        author = record.get('author')
        message = record.get('message')
        candidates = [
            record.get('role'),
            record.get('speaker'),
            record.get('sender'),
            author.get('role') if isinstance(author, dict) else None,
            author,
            message.get('role') if isinstance(message, dict) else None,
        ]
        for candidate in candidates:
            if isinstance(candidate, str):
                return candidate.lower()
        return None
