"""
Answer Engine - the submission state machine of a practice session.

States: ``active(i)`` -> ``active(i+1)`` -> ... -> ``completed``, or
``active`` -> ``abandoned``. Both terminal states reject further input.

Pure logic over a :class:`SessionSnapshot`; persisting the resulting
:class:`SessionUpdate` is the repository's job.
"""

from datetime import datetime
from typing import Tuple

from flagstack_app.core.error_handlers import (
    AuthorizationError,
    DataIntegrityError,
    SequenceError,
    ValidationError,
)
from flagstack_app.models.enums import SessionStatus
from flagstack_app.modules.auth.schemas import AuthenticatedUser
from ..logics.scoring import calculate_score, calculate_streak, is_streak_milestone
from ..schemas import GeneratedQuestions, MissingQuestions, SessionSnapshot, SessionUpdate, SubmissionResult


class AnswerEngine:
    @staticmethod
    def ensure_owner(snapshot: SessionSnapshot, user: AuthenticatedUser) -> None:
        if snapshot.user_id != user.user_id:
            raise AuthorizationError('You can only access your own sessions', resource='practice_session')

    @staticmethod
    def ensure_active(snapshot: SessionSnapshot) -> None:
        if snapshot.status is not SessionStatus.ACTIVE:
            raise SequenceError(f"Session is {snapshot.status.value}. Only active sessions accept changes.")

    @staticmethod
    def evaluate(
        snapshot: SessionSnapshot,
        user: AuthenticatedUser,
        question_index: int,
        option_id: str,
        now: datetime,
    ) -> Tuple[SessionUpdate, SubmissionResult]:
        """
        Check a submission and compute its effects.

        Preconditions are checked in this order and each fails differently:
        ownership, active status, generated questions present, index equals
        the current index, index in bounds, question not yet answered,
        option belongs to the question. Nothing is mutated here.
        """
        AnswerEngine.ensure_owner(snapshot, user)
        AnswerEngine.ensure_active(snapshot)

        question_set = snapshot.questions
        if isinstance(question_set, MissingQuestions):
            raise DataIntegrityError(
                'Session has no questions. This may be a legacy session.',
                details={'session_id': snapshot.session_id},
            )

        if question_index != snapshot.current_index:
            raise SequenceError(
                f"Submission index {question_index} does not match current index {snapshot.current_index}",
                expected_index=snapshot.current_index,
                received_index=question_index,
            )

        questions = question_set.questions
        total = len(questions)
        if not 0 <= question_index < total:
            raise SequenceError(
                f"Question index {question_index} is outside 0-{total - 1}",
                expected_index=snapshot.current_index,
                received_index=question_index,
            )

        question = questions[question_index]
        if question.is_answered:
            raise SequenceError(
                'This question has already been answered',
                expected_index=snapshot.current_index,
                received_index=question_index,
            )

        if option_id not in question.option_ids:
            raise ValidationError(
                f'Selected answer "{option_id}" is not a valid option',
                errors={'option_id': option_id, 'valid_options': list(question.option_ids)},
            )

        answered = question.answered(option_id)
        updated_questions = questions[:question_index] + (answered,) + questions[question_index + 1:]

        is_correct = answered.is_correct
        correct_count = snapshot.correct_count + (1 if is_correct else 0)
        score = calculate_score(correct_count, total)
        streak = calculate_streak(updated_questions, question_index)
        next_index = question_index + 1
        is_complete = next_index == total

        update = SessionUpdate(
            questions=GeneratedQuestions(updated_questions),
            current_index=next_index,
            correct_count=correct_count,
            score=score,
            status=SessionStatus.COMPLETED if is_complete else SessionStatus.ACTIVE,
            completed_at=now if is_complete else None,
        )
        result = SubmissionResult(
            is_correct=is_correct,
            correct_answer=question.correct_answer,
            streak=streak,
            score=score,
            correct_count=correct_count,
            is_complete=is_complete,
            next_index=None if is_complete else next_index,
            milestone_reached=streak if is_correct and is_streak_milestone(streak) else None,
        )
        return update, result

    @staticmethod
    def check_abandon(snapshot: SessionSnapshot, user: AuthenticatedUser) -> None:
        """Abandoning is allowed for the owner of an active session only."""
        AnswerEngine.ensure_owner(snapshot, user)
        AnswerEngine.ensure_active(snapshot)
