#!/usr/bin/env python3
"""
Output Formatter for Chat Transcript Formatter
Renders turns as "Name: content" blocks separated by blank lines.
"""

from typing import Dict, Any, List, Optional, Tuple
import logging

from models import Role, Turn
from config_manager import get_nested_value

logger = logging.getLogger(__name__)

class TranscriptFormatter:
    """Formats turns into a speaker-labeled plain-text transcript"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.role_names = {
            Role.QUESTIONER: get_nested_value(config, 'roles.questioner_name', 'Darko'),
            Role.RESPONDER: get_nested_value(config, 'roles.responder_name', 'Claude'),
        }

    def resolve_roles(self, turns: List[Turn]) -> List[Tuple[Role, str]]:
        """
        Assign a concrete role to every non-empty turn

        Unknown hints resolve by position among the non-empty turns, so
        positional roles always alternate in the output.
        """
        resolved = []
        for turn in turns:
            if turn.is_empty():
                continue
            resolved.append((turn.role_hint.resolve(len(resolved)), turn.content.strip()))
        return resolved

    def format_turns(self, turns: List[Turn]) -> str:
        """
        Render turns in order

        Args:
            turns: Turns to render

        Returns:
            The transcript; an empty string when every turn was empty
        """
        blocks = [
            f"{self.role_names[role]}: {content}"
            for role, content in self.resolve_roles(turns)
        ]

        skipped = len(turns) - len(blocks)
        if skipped:
            logger.debug(f"Skipped {skipped} empty turns")

        return "\n\n".join(blocks)
