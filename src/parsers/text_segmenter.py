#!/usr/bin/env python3
"""
Text Segmenter for Chat Transcript Formatter
Guesses turn boundaries in transcripts that carry no speaker labels.
"""

import re
import logging
from typing import List

from models import Role, Turn
from parsers.common import ExtractionResult, SegmentationStrategy

logger = logging.getLogger(__name__)

PARAGRAPH_GAP = re.compile(r'\n\s*\n+')
LINE_BREAKS = re.compile(r'\n+')
SENTENCE_END = re.compile(r'[.!?]')

class ParagraphGapStrategy(SegmentationStrategy):
    """One turn per blank-line separated chunk, alternating roles"""

    name = "paragraph"

    def segment(self, text: str) -> ExtractionResult:
        chunks = PARAGRAPH_GAP.split(text)

        # A single chunk means there is no blank-line structure to go on
        if len(chunks) == 1:
            return ExtractionResult([], method=self.name)

        non_empty = [chunk.strip() for chunk in chunks if chunk.strip()]
        if len(non_empty) < 2:
            return ExtractionResult([], method=self.name)

        turns = [Turn(Role.for_position(i), chunk) for i, chunk in enumerate(non_empty)]
        return ExtractionResult(turns, method=self.name)

class AlternatingGroupStrategy(SegmentationStrategy):
    """
    Last-resort grouping of a flat line stream into message-sized blocks

    Lines are accumulated until the block is long enough, input runs out, or
    the block already holds two complete sentences; each closed block becomes a
    turn and the role flips.
    """

    name = "grouped"

    def __init__(self, block_length_threshold: int = 100):
        self.block_length_threshold = block_length_threshold

    def segment(self, text: str) -> ExtractionResult:
        lines = [line for line in LINE_BREAKS.split(text) if line.strip()]

        if not lines:
            return ExtractionResult([Turn(Role.QUESTIONER, text)], method=self.name)

        turns = []
        block: List[str] = []
        role = Role.QUESTIONER

        for index, line in enumerate(lines):
            block.append(line)
            if self._should_close(block, line, index == len(lines) - 1):
                turns.append(Turn(role, '\n'.join(block)))
                block = []
                role = role.flip()

        return ExtractionResult(turns, method=self.name)

    def _should_close(self, block: List[str], line: str, is_last: bool) -> bool:
        block_text = '\n'.join(block)
        if len(block_text) > self.block_length_threshold:
            return True
        if is_last:
            return True
        return line.endswith(('.', '!', '?')) and len(SENTENCE_END.split(block_text)) > 2

class SmartSplitter:
    """Paragraph-gap splitting with the alternating grouper as fallback"""

    def __init__(self, block_length_threshold: int = 100):
        self.paragraph_strategy = ParagraphGapStrategy()
        self.group_strategy = AlternatingGroupStrategy(block_length_threshold)

    def split(self, text: str) -> ExtractionResult:
        result = self.paragraph_strategy.segment(text)
        if result.success:
            logger.debug(f"Paragraph gaps produced {len(result.turns)} turns")
            return result

        logger.debug("No usable paragraph gaps, grouping lines instead")
        return self.group_strategy.segment(text)
