"""Closed value sets shared by models, engine and routes."""

from __future__ import annotations

from enum import Enum


class FlagType(str, Enum):
    FLAG_LETTER = 'flag-letter'
    FLAG_NUMBER = 'flag-number'
    PENNANT_NUMBER = 'pennant-number'
    SPECIAL_PENNANT = 'special-pennant'
    SUBSTITUTE = 'substitute'


class Difficulty(str, Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


class PracticeMode(str, Enum):
    # Show the flag image, pick its name
    LEARN = 'learn'
    # Show the meaning, pick the flag image
    MATCH = 'match'


class SessionStatus(str, Enum):
    ACTIVE = 'active'
    COMPLETED = 'completed'
    ABANDONED = 'abandoned'

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.ACTIVE


class UserRole(str, Enum):
    CADET = 'cadet'
    INSTRUCTOR = 'instructor'
    ADMIN = 'admin'


def enum_values(enum_cls) -> list[str]:
    """Persist enum values (not member names) in SQLAlchemy ``Enum`` columns."""
    return [member.value for member in enum_cls]
