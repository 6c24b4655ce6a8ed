"""Public API of the practice module for other modules."""

from typing import List

from flagstack_app.models import PracticeSession


class PracticeInterface:
    @staticmethod
    def list_user_sessions(user_id: int) -> List[PracticeSession]:
        from .services.session_repository import SessionRepository
        return SessionRepository.list_for_user(user_id)
