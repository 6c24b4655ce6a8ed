"""Value objects exchanged between the practice engine, its services and routes."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple, Union

from flagstack_app.models.enums import PracticeMode, SessionStatus
from flagstack_app.modules.catalog.schemas import CatalogItem

SessionLength = Union[int, str]


@dataclass(frozen=True)
class Option:
    id: str
    label: str
    value: str
    image_path: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'id': self.id, 'label': self.label, 'value': self.value}
        if self.image_path is not None:
            data['image_path'] = self.image_path
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Option':
        return cls(
            id=data.get('id', ''),
            label=data.get('label', ''),
            value=data.get('value', ''),
            image_path=data.get('image_path'),
        )


@dataclass(frozen=True)
class Question:
    """One flag under test. ``user_answer`` is written once, through :meth:`answered`."""

    flag_id: int
    question_type: PracticeMode
    options: Tuple[Option, ...]
    correct_answer: str
    user_answer: Optional[str] = None

    @property
    def is_answered(self) -> bool:
        return self.user_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.is_answered and self.user_answer == self.correct_answer

    @property
    def option_ids(self) -> Tuple[str, ...]:
        return tuple(opt.id for opt in self.options)

    def answered(self, option_id: str) -> 'Question':
        return replace(self, user_answer=option_id)

    def to_dict(self, reveal_answer: bool = True) -> dict:
        data = {
            'flag_id': self.flag_id,
            'question_type': self.question_type.value,
            'options': [opt.to_dict() for opt in self.options],
            'user_answer': self.user_answer,
        }
        if reveal_answer:
            data['correct_answer'] = self.correct_answer
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Question':
        return cls(
            flag_id=data['flag_id'],
            question_type=PracticeMode(data['question_type']),
            options=tuple(Option.from_dict(o) for o in data.get('options') or ()),
            correct_answer=data.get('correct_answer', ''),
            user_answer=data.get('user_answer'),
        )


@dataclass(frozen=True)
class GeneratedQuestions:
    questions: Tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def to_json(self) -> list:
        return [q.to_dict() for q in self.questions]


@dataclass(frozen=True)
class MissingQuestions:
    """Legacy session stored without a generated question sequence."""

    def __len__(self) -> int:
        return 0


QuestionSet = Union[GeneratedQuestions, MissingQuestions]


def question_set_from_json(raw) -> QuestionSet:
    if not raw:
        return MissingQuestions()
    return GeneratedQuestions(tuple(Question.from_dict(q) for q in raw))


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of a ``PracticeSession`` row used by the answer engine."""

    session_id: int
    user_id: int
    mode: PracticeMode
    status: SessionStatus
    current_index: int
    correct_count: int
    score: int
    flag_ids: Tuple[int, ...]
    questions: QuestionSet

    @classmethod
    def from_model(cls, session) -> 'SessionSnapshot':
        return cls(
            session_id=session.session_id,
            user_id=session.user_id,
            mode=PracticeMode(session.mode),
            status=SessionStatus(session.status),
            current_index=session.current_index,
            correct_count=session.correct_count,
            score=session.score,
            flag_ids=tuple(session.flag_ids or ()),
            questions=question_set_from_json(session.questions),
        )


@dataclass(frozen=True)
class SessionDraft:
    """Everything needed to insert a new active session."""

    user_id: int
    mode: PracticeMode
    session_length: int
    flag_ids: Tuple[int, ...]
    questions: GeneratedQuestions
    generation_time_ms: Optional[int] = None


@dataclass(frozen=True)
class SessionUpdate:
    """Field values written by one accepted answer submission."""

    questions: GeneratedQuestions
    current_index: int
    correct_count: int
    score: int
    status: SessionStatus
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class StreakProgress:
    current: int
    next_milestone: Optional[int]
    percentage: int

    def to_dict(self) -> dict:
        return {
            'current': self.current,
            'next_milestone': self.next_milestone,
            'percentage': self.percentage,
        }


@dataclass(frozen=True)
class SubmissionResult:
    is_correct: bool
    correct_answer: str
    streak: int
    score: int
    correct_count: int
    is_complete: bool
    next_index: Optional[int] = None
    milestone_reached: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'is_correct': self.is_correct,
            'correct_answer': self.correct_answer,
            'streak': self.streak,
            'score': self.score,
            'correct_count': self.correct_count,
            'is_complete': self.is_complete,
            'next_index': self.next_index,
            'milestone_reached': self.milestone_reached,
        }


@dataclass(frozen=True)
class ProgressSummary:
    current_index: int
    total: int
    correct: int
    incorrect: int
    streak: int
    accuracy: int
    streak_progress: StreakProgress

    def to_dict(self) -> dict:
        return {
            'current_index': self.current_index,
            'total': self.total,
            'correct': self.correct,
            'incorrect': self.incorrect,
            'streak': self.streak,
            'accuracy': self.accuracy,
            'streak_progress': self.streak_progress.to_dict(),
        }


@dataclass(frozen=True)
class CurrentQuestionView:
    session_id: int
    question_index: int
    question: Question
    flag: CatalogItem
    progress: ProgressSummary
    mode: PracticeMode = field(default=PracticeMode.LEARN)

    def to_dict(self) -> dict:
        # The correct option stays hidden until the answer is submitted
        return {
            'session_id': self.session_id,
            'question_index': self.question_index,
            'mode': self.mode.value,
            'question': self.question.to_dict(reveal_answer=False),
            'flag': self.flag.to_dict(),
            'progress': self.progress.to_dict(),
        }
