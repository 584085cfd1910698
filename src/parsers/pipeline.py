#!/usr/bin/env python3
"""
Transcript Pipeline for Chat Transcript Formatter
Coordinates extraction, segmentation and rendering with fallback handling.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from models import FormatResult
from config_manager import get_default_config, get_nested_value
from output_formatter import TranscriptFormatter
from parsers.common import ExtractionResult, ExtractorErrorHandler
from parsers.document_extractor import DocumentExtractor, NodeKind, node_kind
from parsers.html_extractor import HTMLPageExtractor
from parsers.label_parser import LabelVocabulary, LabeledTextStrategy
from parsers.text_normalizer import TextNormalizer
from parsers.text_segmenter import SmartSplitter

logger = logging.getLogger(__name__)

EMPTY_INPUT_REASON = "Please paste a conversation first."
UNPARSEABLE_TEXT_REASON = (
    "Could not parse the conversation. Please make sure you copied the entire conversation."
)

class TranscriptPipeline:
    """
    Turn raw text, page markup or a decoded document into a labeled transcript

    The pipeline holds only configuration; every call is independent and
    performs no I/O.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or get_default_config()

        questioner_name = get_nested_value(self.config, 'roles.questioner_name', 'Darko')
        responder_name = get_nested_value(self.config, 'roles.responder_name', 'Claude')

        self.vocabulary = LabelVocabulary(questioner_name, responder_name)
        self.labeled_strategy = LabeledTextStrategy(self.vocabulary)
        self.splitter = SmartSplitter(
            get_nested_value(self.config, 'segmentation.block_length_threshold', 100)
        )
        self.document_extractor = DocumentExtractor(
            responder_name=responder_name,
            max_depth=get_nested_value(self.config, 'extraction.max_depth', 20)
        )
        self.html_extractor = HTMLPageExtractor(
            self.document_extractor,
            min_block_length=get_nested_value(self.config, 'extraction.min_block_length', 10),
            min_raw_text_length=get_nested_value(self.config, 'extraction.min_raw_text_length', 100)
        )
        self.formatter = TranscriptFormatter(self.config)

    def format_input(self, source: Any) -> FormatResult:
        """Dispatch on the input type: text goes to segmentation, trees to extraction"""
        if isinstance(source, (str, bytes)):
            return self.format_text(source)
        return self.format_document(source)

    def format_text(self, text: Union[str, bytes, None]) -> FormatResult:
        """
        Format pasted transcript text

        Args:
            text: Raw text, possibly with speaker labels

        Returns:
            FormatResult with the rendered transcript, or an empty_input failure
        """
        normalized = TextNormalizer.normalize_text(text)
        if not normalized:
            logger.debug("Input is empty after normalization")
            return FormatResult.failure("empty_input", EMPTY_INPUT_REASON)

        if self.labeled_strategy.detects_labels(normalized):
            result = self.labeled_strategy.segment(normalized)
        else:
            result = self.splitter.split(normalized)

        self._log_attempt(result)

        if not result.success:
            return FormatResult.failure("no_extractable_structure", UNPARSEABLE_TEXT_REASON, result.method)

        return self._render(result)

    def format_document(self, document: Any) -> FormatResult:
        """
        Format a decoded document tree (or a JSON string to be decoded)

        Raises:
            TypeError: If the document is neither JSON text nor a dict/list tree
        """
        if isinstance(document, (str, bytes)):
            try:
                document = json.loads(TextNormalizer.normalize_text(document))
            except json.JSONDecodeError as e:
                logger.debug(f"Document is not valid JSON: {e}")
                return self._no_structure()
            except RecursionError:
                logger.debug("Document is nested too deeply to decode")
                return self._no_structure()
            if node_kind(document) not in (NodeKind.MAP, NodeKind.ARRAY):
                logger.debug("Decoded document is a scalar")
                return self._no_structure()

        elif node_kind(document) not in (NodeKind.MAP, NodeKind.ARRAY):
            raise TypeError(f"Expected a dict or list document, got {type(document).__name__}")

        result = self.document_extractor.extract(document)
        self._log_attempt(result)

        if not result.success:
            return self._no_structure()

        return self._render(result)

    def format_html(self, markup: Union[str, bytes, None]) -> FormatResult:
        """Format a conversation from shared-page markup"""
        if isinstance(markup, bytes):
            markup = TextNormalizer.decode_bytes(markup)
        if not markup or not markup.strip():
            return FormatResult.failure("empty_input", EMPTY_INPUT_REASON)

        page = self.html_extractor.extract(markup)
        self._log_attempt(page.result)

        if page.result.success:
            return self._render(page.result)

        if not page.found_anything:
            return self._no_structure()

        result = self.format_text(page.raw_text)
        if result.success:
            logger.info(f"Page text segmented with method {result.method}")
            result.method = "raw_text"
        return result

    def _render(self, result: ExtractionResult) -> FormatResult:
        transcript = self.formatter.format_turns(result.turns)
        if not transcript:
            logger.info("All recovered turns were empty")

        turn_count = len(self.formatter.resolve_roles(result.turns))
        logger.info(f"Formatted {turn_count} turns using {result.method}")

        return FormatResult(
            transcript=transcript,
            method=result.method,
            turn_count=turn_count
        )

    def _no_structure(self) -> FormatResult:
        logger.warning("No extractable conversation structure found")
        return FormatResult.failure(
            "no_extractable_structure",
            ExtractorErrorHandler.get_user_friendly_message("no_extractable_structure")
        )

    def _log_attempt(self, result: ExtractionResult) -> None:
        status = "SUCCESS" if result.success else "FAILED"
        logger.debug(f"Strategy {result.method}: {status} ({len(result.turns)} turns)")
