"""
Practice Service - answer submission, abandonment and session reads.

Every public method takes the caller as an explicit ``AuthenticatedUser``.
"""

from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from flagstack_app.core.error_handlers import NotFoundError
from flagstack_app.models import PracticeSession
from flagstack_app.modules.auth.schemas import AuthenticatedUser
from flagstack_app.modules.catalog.interface import CatalogInterface
from ..engine.answer_engine import AnswerEngine
from ..logics.progress import build_progress
from ..schemas import CurrentQuestionView, GeneratedQuestions, SessionSnapshot, SubmissionResult
from .session_repository import SessionRepository


class PracticeService:
    @staticmethod
    def get_session(user: AuthenticatedUser, session_id: int) -> PracticeSession:
        """Owner-scoped read. Raises NotFoundError or AuthorizationError."""
        session = SessionRepository.get(session_id)
        if session is None:
            raise NotFoundError(f"Practice session {session_id} not found", resource='practice_session')
        AnswerEngine.ensure_owner(SessionSnapshot.from_model(session), user)
        return session

    @staticmethod
    def get_incomplete_session(user: AuthenticatedUser) -> Optional[PracticeSession]:
        return SessionRepository.get_active_for_user(user.user_id)

    @staticmethod
    def get_current_question(user: AuthenticatedUser, session_id: int) -> Optional[CurrentQuestionView]:
        """The pending question, or None when the session has nothing left to answer."""
        snapshot = SessionSnapshot.from_model(PracticeService.get_session(user, session_id))
        if snapshot.status.is_terminal:
            return None
        if not isinstance(snapshot.questions, GeneratedQuestions):
            return None
        if snapshot.current_index >= len(snapshot.questions):
            return None

        question = snapshot.questions.questions[snapshot.current_index]
        flag = CatalogInterface.get_flags_by_ids([question.flag_id])[0]
        return CurrentQuestionView(
            session_id=snapshot.session_id,
            question_index=snapshot.current_index,
            question=question,
            flag=flag,
            progress=build_progress(snapshot),
            mode=snapshot.mode,
        )

    @staticmethod
    def submit_answer(
        user: AuthenticatedUser,
        session_id: int,
        question_index: int,
        option_id: str,
    ) -> SubmissionResult:
        session = SessionRepository.get(session_id)
        if session is None:
            raise NotFoundError(f"Practice session {session_id} not found", resource='practice_session')

        snapshot = SessionSnapshot.from_model(session)
        changes, result = AnswerEngine.evaluate(
            snapshot, user, question_index, option_id, datetime.now(timezone.utc)
        )
        SessionRepository.compare_and_advance(session_id, snapshot.current_index, changes)

        if result.is_complete:
            current_app.logger.info(
                f"Practice session {session_id} completed by user {user.user_id} with score {result.score}"
            )
        return result

    @staticmethod
    def abandon_session(user: AuthenticatedUser, session_id: int) -> None:
        session = SessionRepository.get(session_id)
        if session is None:
            raise NotFoundError(f"Practice session {session_id} not found", resource='practice_session')

        AnswerEngine.check_abandon(SessionSnapshot.from_model(session), user)
        SessionRepository.mark_abandoned(session_id, datetime.now(timezone.utc))
        current_app.logger.info(f"Practice session {session_id} abandoned by user {user.user_id}")
