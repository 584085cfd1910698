#!/usr/bin/env python3
"""
Data models for Chat Transcript Formatter
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

class Role(Enum):
    """Canonical speaker roles"""
    QUESTIONER = "questioner"
    RESPONDER = "responder"

    def flip(self) -> "Role":
        return Role.RESPONDER if self == Role.QUESTIONER else Role.QUESTIONER

    @staticmethod
    def for_position(index: int) -> "Role":
        """Strict alternation, questioner first"""
        return Role.QUESTIONER if index % 2 == 0 else Role.RESPONDER

class RoleHint(Enum):
    """Role attached to a turn before normalization"""
    QUESTIONER = "questioner"
    RESPONDER = "responder"
    UNKNOWN = "unknown"

    @classmethod
    def from_role(cls, role: Role) -> "RoleHint":
        return cls(role.value)

    def resolve(self, index: int) -> Role:
        """Resolve to a concrete role, using position when unknown"""
        if self == RoleHint.UNKNOWN:
            return Role.for_position(index)
        return Role(self.value)

@dataclass
class Turn:
    """One contiguous block of dialogue attributed to a single speaker"""
    role_hint: RoleHint
    content: str

    def __post_init__(self):
        if isinstance(self.role_hint, Role):
            self.role_hint = RoleHint.from_role(self.role_hint)
        elif isinstance(self.role_hint, str):
            self.role_hint = RoleHint(self.role_hint.lower())

    def is_empty(self) -> bool:
        return not self.content or not self.content.strip()

@dataclass
class FormatResult:
    """Outcome of a formatting run"""
    transcript: Optional[str] = None
    method: Optional[str] = None
    error_type: Optional[str] = None
    reason: Optional[str] = None
    turn_count: int = 0

    @property
    def success(self) -> bool:
        # An empty string still counts: turns were found, none had content
        return self.transcript is not None

    @classmethod
    def failure(cls, error_type: str, reason: str, method: Optional[str] = None) -> "FormatResult":
        return cls(transcript=None, method=method, error_type=error_type, reason=reason)
