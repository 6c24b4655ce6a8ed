"""
Structural checks for generated questions.
Pure logic - no Database access, no Flask.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from ..config import PracticeConfig
from ..schemas import Question


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_question_structure(question: Question) -> ValidationResult:
    result = ValidationResult()

    if not question.flag_id:
        result.errors.append('Question missing flag_id')
    if question.question_type is None:
        result.errors.append('Question missing question_type')

    options = question.options
    if len(options) != PracticeConfig.OPTION_COUNT:
        result.errors.append(
            f"Question must have exactly {PracticeConfig.OPTION_COUNT} options, got {len(options)}"
        )

    for index, option in enumerate(options):
        if not option.id:
            result.errors.append(f"Option {index} missing id")
        # match-mode options carry an image instead of a label
        if not option.label and not option.image_path:
            result.errors.append(f"Option {index} missing label and image")
        if not option.value:
            result.errors.append(f"Option {index} missing value")

    values = [o.value for o in options]
    if len(values) != len(set(values)):
        result.errors.append('Question has duplicate option values')

    if not question.correct_answer:
        result.errors.append('Question missing correct_answer')
    elif question.correct_answer not in question.option_ids:
        result.errors.append(f'correct_answer "{question.correct_answer}" does not match any option id')

    if question.user_answer is not None:
        result.errors.append('user_answer must be empty on a new question')

    return result


def validate_session_questions(questions: Sequence[Question]) -> ValidationResult:
    result = ValidationResult()
    if not questions:
        result.errors.append('Session must have at least one question')
        return result

    for index, question in enumerate(questions):
        question_result = validate_question_structure(question)
        if not question_result.is_valid:
            result.errors.append(f"Question {index}: {', '.join(question_result.errors)}")

    flag_ids = [q.flag_id for q in questions]
    if len(flag_ids) != len(set(flag_ids)):
        result.errors.append('Session contains duplicate flags')

    return result


def answer_distribution_ok(questions: Sequence[Question]) -> bool:
    """Heuristic: with 4+ questions the correct answer should sit in at least 3 different slots."""
    if len(questions) < PracticeConfig.OPTION_COUNT:
        return True

    used_slots = set()
    for question in questions:
        if question.correct_answer in question.option_ids:
            used_slots.add(question.option_ids.index(question.correct_answer))
    return len(used_slots) >= min(3, len(questions))
