from .practice_service import PracticeService
from .session_generator import SessionGenerator
from .session_repository import SessionRepository

__all__ = ['PracticeService', 'SessionGenerator', 'SessionRepository']
