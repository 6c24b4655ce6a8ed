"""
Distractor Engine - builds the 4 options for one question.
Pure logic, no Database access.
"""

import random
from typing import Callable, Dict, List, Sequence, Tuple

from flagstack_app.core.error_handlers import DataIntegrityError, GenerationError
from flagstack_app.models.enums import PracticeMode
from flagstack_app.modules.catalog.schemas import CatalogItem
from ..config import PracticeConfig
from ..logics.randomization import RandomFn, select_random_items
from ..logics.similarity import rank_by_similarity
from ..schemas import Option, Question


def _learn_option(flag: CatalogItem) -> Option:
    # Flag image is the prompt; options are names
    return Option(id='', label=flag.name, value=flag.key)


def _match_option(flag: CatalogItem) -> Option:
    # Meaning is the prompt; options are flag images
    return Option(id='', label='', value=flag.key, image_path=flag.image_path)


OPTION_BUILDERS: Dict[PracticeMode, Callable[[CatalogItem], Option]] = {
    PracticeMode.LEARN: _learn_option,
    PracticeMode.MATCH: _match_option,
}


class DistractorEngine:
    @staticmethod
    def select_distractors(
        target: CatalogItem,
        catalog: Sequence[CatalogItem],
        mode: PracticeMode,
        random_fn: RandomFn = random.random,
    ) -> List[CatalogItem]:
        """Top ranked flags by mode similarity, or a random sample when the ranking is too short."""
        needed = PracticeConfig.DISTRACTOR_COUNT
        ranked = rank_by_similarity(target, catalog, mode)
        if len(ranked) >= needed:
            return [flag for flag, _score in ranked[:needed]]

        available = [f for f in catalog if f.id != target.id]
        return select_random_items(available, min(needed, len(available)), random_fn)

    @staticmethod
    def generate_options(
        target: CatalogItem,
        catalog: Sequence[CatalogItem],
        correct_position: int,
        mode: PracticeMode,
        random_fn: RandomFn = random.random,
    ) -> Tuple[Tuple[Option, ...], str]:
        """
        Build the option list with ``target`` at ``correct_position``.

        Args:
            target: Flag under test.
            catalog: Complete pool of flags (target included).
            correct_position: Slot 0-3 that must hold the correct answer.
            mode: Decides both the similarity metric and the option shape.

        Returns:
            ``(options, correct_answer_id)`` with ids ``opt_0``..``opt_3``.
        """
        option_count = PracticeConfig.OPTION_COUNT
        if len(catalog) < PracticeConfig.MIN_CATALOG_SIZE:
            raise DataIntegrityError(
                f"Insufficient flags for question generation. "
                f"Need at least {PracticeConfig.MIN_CATALOG_SIZE}, got {len(catalog)}",
                details={'catalog_size': len(catalog)},
            )
        if not 0 <= correct_position < option_count:
            raise GenerationError(
                f"Correct answer position {correct_position} is outside 0-{option_count - 1}",
                flag_key=target.key,
            )

        build = OPTION_BUILDERS[mode]
        distractors = DistractorEngine.select_distractors(target, catalog, mode, random_fn)

        slots = [None] * option_count
        slots[correct_position] = target
        remaining = iter(distractors)
        for i in range(option_count):
            if slots[i] is None:
                slots[i] = next(remaining)

        options = tuple(
            Option(id=f"opt_{i}", label=o.label, value=o.value, image_path=o.image_path)
            for i, o in enumerate(build(flag) for flag in slots)
        )
        correct_answer = f"opt_{correct_position}"

        DistractorEngine.validate_options(options, correct_answer, target.key)
        return options, correct_answer

    @staticmethod
    def validate_options(options: Sequence[Option], correct_answer: str, flag_key: str = None) -> None:
        """Raise GenerationError unless the options form a well-formed 4-way choice."""
        if len(options) != PracticeConfig.OPTION_COUNT:
            raise GenerationError(
                f"Expected {PracticeConfig.OPTION_COUNT} options, got {len(options)}", flag_key=flag_key
            )

        values = [o.value for o in options]
        if len(values) != len(set(values)):
            raise GenerationError('Generated options contain duplicate flag values', flag_key=flag_key)

        if correct_answer not in {o.id for o in options}:
            raise GenerationError(f'Correct answer id "{correct_answer}" not found in options', flag_key=flag_key)

        for index, option in enumerate(options):
            if not option.id or not option.value or not (option.label or option.image_path):
                raise GenerationError(f"Option {index} missing required fields", flag_key=flag_key)

    @staticmethod
    def build_question(
        target: CatalogItem,
        catalog: Sequence[CatalogItem],
        correct_position: int,
        mode: PracticeMode,
        random_fn: RandomFn = random.random,
    ) -> Question:
        options, correct_answer = DistractorEngine.generate_options(
            target, catalog, correct_position, mode, random_fn
        )
        return Question(
            flag_id=target.id,
            question_type=mode,
            options=options,
            correct_answer=correct_answer,
        )
