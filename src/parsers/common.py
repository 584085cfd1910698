#!/usr/bin/env python3
"""
Common Components for Chat Transcript Formatter
Shared result containers, strategy base class and error handling.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from models import Turn

logger = logging.getLogger(__name__)

class ExtractionResult:
    """Container for turns produced by one strategy"""

    def __init__(self, turns: List[Turn], method: Optional[str] = None):
        self.turns = turns
        self.method = method  # Which strategy produced the turns
        self.success = len(turns) > 0

class ExtractionError(Exception):
    """Raised by the fetch layer when a page cannot be retrieved"""

    def __init__(self, message: str, error_type: str = "general", url: Optional[str] = None):
        super().__init__(message)
        self.error_type = error_type
        self.url = url
        self.timestamp = datetime.now()

class SegmentationStrategy(ABC):
    """Abstract base class for text segmentation strategies"""

    name = "segmentation"

    @abstractmethod
    def segment(self, text: str) -> ExtractionResult:
        """Split text into turns using this strategy"""
        pass

class ExtractorErrorHandler:
    """Centralized error handling for fetch failures"""

    MANUAL_SUGGESTION = "Copy the conversation text manually and format it from a file or stdin"

    SUGGESTIONS = {
        "invalid_url": [
            "Check that the URL is a public share link",
            "Make sure the URL starts with https://"
        ],
        "access_denied": [
            "The shared link may require login/authentication",
            "Verify the URL works in your browser first",
            "The service may be blocking automated requests"
        ],
        "not_found": [
            "The shared link may be invalid or expired",
            "The conversation may have been deleted"
        ],
        "timeout": [
            "The service may be slow to respond",
            "Try again later"
        ],
        "connection_error": [
            "Check your internet connection",
            "The service may be temporarily unavailable"
        ],
        "no_extractable_structure": [
            "The page structure may have changed"
        ]
    }

    @staticmethod
    def classify_message(error_msg: str) -> str:
        """Map a free-text error message to an error type"""
        lowered = error_msg.lower()

        if "403" in error_msg or "forbidden" in lowered:
            return "access_denied"
        elif "404" in error_msg or "not found" in lowered:
            return "not_found"
        elif "timeout" in lowered or "timed out" in lowered:
            return "timeout"
        elif "connection" in lowered:
            return "connection_error"
        return "http_error"

    @staticmethod
    def handle_extraction_error(error: Exception, url: str, context: str = "") -> ExtractionError:
        """
        Convert generic exceptions to structured ExtractionError

        Args:
            error: Original exception
            url: URL being processed
            context: Additional context about where the error occurred

        Returns:
            Structured ExtractionError
        """
        error_msg = str(error)
        error_type = ExtractorErrorHandler.classify_message(error_msg)

        detailed_msg = f"Failed to fetch {url}"
        if context:
            detailed_msg += f" in {context}"
        detailed_msg += f": {error_msg}"

        return ExtractionError(detailed_msg, error_type, url)

    @staticmethod
    def get_user_friendly_message(error_type: str, detail: Optional[str] = None) -> str:
        """Get user-friendly error message with suggested solutions"""
        if error_type == "no_extractable_structure":
            base_msg = "Could not extract a conversation from the page"
        else:
            base_msg = "Failed to fetch the conversation"
        if detail:
            base_msg += f" ({detail})"

        suggestions = list(ExtractorErrorHandler.SUGGESTIONS.get(error_type, [
            "This may be a temporary issue",
            "Try again later"
        ]))
        suggestions.append(ExtractorErrorHandler.MANUAL_SUGGESTION)

        full_msg = f"{base_msg}.\n\nPossible solutions:\n"
        for i, suggestion in enumerate(suggestions, 1):
            full_msg += f"{i}. {suggestion}\n"

        return full_msg.strip()

    @staticmethod
    def should_retry(error: ExtractionError) -> bool:
        """Determine if the operation should be retried"""
        non_retryable_types = ["invalid_url", "access_denied", "not_found"]
        return error.error_type not in non_retryable_types
