"""
Session Generator - orchestrates creation of a complete practice session.

Creation is all-or-nothing: every question is generated and validated in
memory first, and the session row is only inserted once all of them pass.
"""

import random
from typing import List, Optional, Sequence, Tuple

from flask import current_app

from flagstack_app.core.error_handlers import (
    ConflictError,
    DataIntegrityError,
    FlagstackError,
    GenerationError,
)
from flagstack_app.models import PracticeMode, PracticeSession
from flagstack_app.modules.auth.schemas import AuthenticatedUser
from flagstack_app.modules.catalog.interface import CatalogInterface
from flagstack_app.modules.catalog.schemas import CatalogItem
from flagstack_app.utils.performance import measure_and_warn
from ..config import PracticeConfig
from ..engine.distractor_engine import DistractorEngine
from ..logics.randomization import distribute_answer_positions, seeded_random, select_random_items
from ..logics.validation import answer_distribution_ok, validate_session_questions
from ..schemas import GeneratedQuestions, Question, SessionDraft, SessionLength
from .session_repository import SessionRepository


class SessionGenerator:
    @staticmethod
    def select_flags(
        catalog: Sequence[CatalogItem],
        length: SessionLength,
        seed: Optional[int] = None,
    ) -> List[CatalogItem]:
        """The whole catalog in order for ``"all"``, else a random sample (clamped to the catalog size)."""
        if length == PracticeConfig.ALL_FLAGS:
            return list(catalog)

        count = min(length, len(catalog))
        random_fn = seeded_random(seed) if seed is not None else random.random
        return select_random_items(catalog, count, random_fn)

    @staticmethod
    def generate_questions(
        selected: Sequence[CatalogItem],
        catalog: Sequence[CatalogItem],
        mode: PracticeMode,
        seed: Optional[int] = None,
    ) -> Tuple[Question, ...]:
        """Build one question per selected flag; any failure aborts the whole batch."""
        if len(catalog) < PracticeConfig.MIN_CATALOG_SIZE:
            raise DataIntegrityError(
                f"Insufficient flags for practice. Need at least {PracticeConfig.MIN_CATALOG_SIZE}, "
                f"got {len(catalog)}",
                details={'catalog_size': len(catalog)},
            )

        positions = distribute_answer_positions(len(selected), seed, PracticeConfig.OPTION_COUNT)

        questions = []
        for flag, position in zip(selected, positions):
            try:
                questions.append(DistractorEngine.build_question(flag, catalog, position, mode))
            except FlagstackError:
                raise
            except Exception as exc:
                raise GenerationError(
                    f"Failed to generate question for flag {flag.key}: {exc}",
                    flag_key=flag.key,
                ) from exc

        validation = validate_session_questions(questions)
        if not validation.is_valid:
            raise GenerationError('Generated questions failed validation: ' + '; '.join(validation.errors))

        if not answer_distribution_ok(questions):
            current_app.logger.warning(
                f"Correct answers poorly distributed across {len(questions)} questions"
            )

        return tuple(questions)

    @staticmethod
    def create_session(
        user: AuthenticatedUser,
        mode: PracticeMode,
        length: SessionLength,
        seed: Optional[int] = None,
    ) -> PracticeSession:
        """
        Create a new active session for ``user``.

        Raises:
            ConflictError: the user already has an active session.
            DataIntegrityError: the catalog holds fewer than 4 flags.
            GenerationError: a question could not be generated or validated.
        """
        existing = SessionRepository.get_active_for_user(user.user_id)
        if existing:
            raise ConflictError(
                'You already have an active practice session. Please complete or abandon it first.',
                session_id=existing.session_id,
            )

        catalog = CatalogInterface.list_flags()
        if len(catalog) < PracticeConfig.MIN_CATALOG_SIZE:
            raise DataIntegrityError(
                f"Insufficient flags for practice. Need at least {PracticeConfig.MIN_CATALOG_SIZE}, "
                f"got {len(catalog)}",
                details={'catalog_size': len(catalog)},
            )

        def _generate():
            selected = SessionGenerator.select_flags(catalog, length, seed)
            return selected, SessionGenerator.generate_questions(selected, catalog, mode, seed)

        (selected, questions), metrics = measure_and_warn(
            _generate,
            f"generate {mode.value} session",
            threshold_ms=current_app.config.get('PRACTICE_GENERATION_WARN_MS', 2000),
            log=current_app.logger,
        )

        draft = SessionDraft(
            user_id=user.user_id,
            mode=mode,
            session_length=len(selected) if length == PracticeConfig.ALL_FLAGS else length,
            flag_ids=tuple(flag.id for flag in selected),
            questions=GeneratedQuestions(questions),
            generation_time_ms=metrics.duration_ms,
        )
        session = SessionRepository.create_if_absent(draft)
        current_app.logger.info(
            f"Practice session {session.session_id} created for user {user.user_id}: "
            f"{mode.value}, {len(questions)} questions in {metrics.duration_ms}ms"
        )
        return session
