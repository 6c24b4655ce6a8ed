"""Database models package for Flagstack."""

from ..db_instance import db

from .enums import Difficulty, FlagType, PracticeMode, SessionStatus, UserRole
from .flag import Flag
from .practice_session import PracticeSession
from .user import User

__all__ = [
    'db',
    'Difficulty',
    'FlagType',
    'PracticeMode',
    'SessionStatus',
    'UserRole',
    'Flag',
    'PracticeSession',
    'User',
]
