#!/usr/bin/env python3
"""
Label Parser for Chat Transcript Formatter
Detects and splits transcripts that already carry "Speaker:" prefixes.
"""

import re
import logging
from typing import List

from models import Role, Turn
from parsers.common import ExtractionResult, SegmentationStrategy

logger = logging.getLogger(__name__)

class LabelVocabulary:
    """
    Recognized speaker labels and the single pattern built from them

    Detection and splitting both go through ``pattern`` so they can never
    disagree about where a label is.
    """

    BASE_QUESTIONER_LABELS = ['You', 'User']
    BASE_RESPONDER_LABELS = ['Assistant']

    def __init__(self, questioner_name: str, responder_name: str):
        self.questioner_name = questioner_name
        self.responder_name = responder_name
        self.labels = self._build_labels()
        alternatives = '|'.join(re.escape(label) for label in self.labels)
        self.pattern = re.compile(rf'^({alternatives}):\s*', re.IGNORECASE | re.MULTILINE)

    def _build_labels(self) -> List[str]:
        candidates = (
            self.BASE_QUESTIONER_LABELS
            + [self.questioner_name]
            + self.BASE_RESPONDER_LABELS
            + [self.responder_name]
        )
        labels = []
        seen = set()
        for label in candidates:
            if label and label.lower() not in seen:
                seen.add(label.lower())
                labels.append(label)
        return labels

    def classify(self, label: str) -> Role:
        """Map a matched label token to a role via the synonym table"""
        token = label.lower()
        questioner_tokens = ['you', 'user', self.questioner_name.lower()]
        if any(t and t in token for t in questioner_tokens):
            return Role.QUESTIONER
        return Role.RESPONDER

class LabeledTextStrategy(SegmentationStrategy):
    """Split text strictly on existing speaker labels"""

    name = "labeled"

    def __init__(self, vocabulary: LabelVocabulary):
        self.vocabulary = vocabulary

    def detects_labels(self, text: str) -> bool:
        """True iff some line starts with a recognized label"""
        if not text:
            return False
        return self.vocabulary.pattern.search(text) is not None

    def parse_labeled(self, text: str) -> List[Turn]:
        """
        Split text at every line-start label

        Args:
            text: Transcript text with speaker labels

        Returns:
            Turns in source order; the role comes from the label, so
            consecutive turns may share a role
        """
        # With one capture group re.split yields [preamble, label, body, label, body, ...]
        parts = self.vocabulary.pattern.split(text)
        turns = []

        for i in range(1, len(parts) - 1, 2):
            role = self.vocabulary.classify(parts[i])
            turns.append(Turn(role, parts[i + 1].strip()))

        if parts and parts[0].strip():
            logger.debug(f"Discarded {len(parts[0].strip())} characters before the first label")

        return turns

    def segment(self, text: str) -> ExtractionResult:
        if not self.detects_labels(text):
            return ExtractionResult([], method=self.name)
        return ExtractionResult(self.parse_labeled(text), method=self.name)
