"""
Session Repository - the only writer of ``practice_sessions`` rows.

Two operations carry the concurrency contract:

* :meth:`create_if_absent` inserts an active session or fails with
  ConflictError; the UNIQUE ``active_marker`` column makes the store reject
  a second active session for the same user.
* :meth:`compare_and_advance` applies a submission with a conditional
  UPDATE guarded by the expected ``current_index``; when another write got
  there first nothing is written and SequenceError is raised.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from flagstack_app.core.error_handlers import ConflictError, SequenceError
from flagstack_app.models import PracticeSession, SessionStatus, db
from flagstack_app.utils.db_session import safe_commit
from ..schemas import SessionDraft, SessionUpdate


class SessionRepository:
    @staticmethod
    def get(session_id: int) -> Optional[PracticeSession]:
        return db.session.get(PracticeSession, session_id)

    @staticmethod
    def get_active_for_user(user_id: int) -> Optional[PracticeSession]:
        return (
            PracticeSession.query
            .filter_by(user_id=user_id, status=SessionStatus.ACTIVE)
            .order_by(PracticeSession.started_at.desc(), PracticeSession.session_id.desc())
            .first()
        )

    @staticmethod
    def list_for_user(user_id: int) -> List[PracticeSession]:
        return (
            PracticeSession.query
            .filter_by(user_id=user_id)
            .order_by(PracticeSession.started_at.desc(), PracticeSession.session_id.desc())
            .all()
        )

    @staticmethod
    def create_if_absent(draft: SessionDraft) -> PracticeSession:
        def _work():
            session = PracticeSession(
                user_id=draft.user_id,
                mode=draft.mode,
                session_length=draft.session_length,
                flag_ids=list(draft.flag_ids),
                questions=draft.questions.to_json(),
                current_index=0,
                correct_count=0,
                score=0,
                status=SessionStatus.ACTIVE,
                active_marker=draft.user_id,
                generation_time_ms=draft.generation_time_ms,
            )
            db.session.add(session)
            return session

        try:
            return safe_commit(db.session, _work)
        except IntegrityError:
            db.session.rollback()
            existing = SessionRepository.get_active_for_user(draft.user_id)
            raise ConflictError(
                'You already have an active practice session. Please complete or abandon it first.',
                session_id=existing.session_id if existing else None,
            )

    @staticmethod
    def compare_and_advance(session_id: int, expected_index: int, changes: SessionUpdate) -> None:
        values = {
            'questions': changes.questions.to_json(),
            'current_index': changes.current_index,
            'correct_count': changes.correct_count,
            'score': changes.score,
            'status': changes.status,
        }
        if changes.status.is_terminal:
            values['active_marker'] = None
            values['completed_at'] = changes.completed_at

        def _work():
            result = db.session.execute(
                update(PracticeSession)
                .where(
                    PracticeSession.session_id == session_id,
                    PracticeSession.current_index == expected_index,
                    PracticeSession.status == SessionStatus.ACTIVE,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise SequenceError(
                    'Session changed before this answer could be recorded',
                    expected_index=expected_index,
                )

        SessionRepository._commit_guarded(_work)

    @staticmethod
    def mark_abandoned(session_id: int, now: datetime) -> None:
        def _work():
            result = db.session.execute(
                update(PracticeSession)
                .where(
                    PracticeSession.session_id == session_id,
                    PracticeSession.status == SessionStatus.ACTIVE,
                )
                .values(status=SessionStatus.ABANDONED, active_marker=None, completed_at=now)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise SequenceError('Only active sessions can be abandoned')

        SessionRepository._commit_guarded(_work)

    @staticmethod
    def _commit_guarded(work) -> None:
        try:
            safe_commit(db.session, work)
        except SequenceError:
            db.session.rollback()
            raise
        finally:
            # Bulk UPDATE bypasses the identity map
            db.session.expire_all()
