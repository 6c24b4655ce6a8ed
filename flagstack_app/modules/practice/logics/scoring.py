"""Score, accuracy and streak arithmetic over a question sequence."""

from typing import Optional, Sequence

from ..config import PracticeConfig
from ..schemas import Question, StreakProgress


def percentage(part: int, whole: int) -> int:
    """``round(100 * part / whole)`` with halves rounded up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def calculate_score(correct_count: int, total: int) -> int:
    return percentage(correct_count, total)


def calculate_accuracy(questions: Sequence[Question]) -> int:
    answered = [q for q in questions if q.is_answered]
    correct = sum(1 for q in answered if q.is_correct)
    return percentage(correct, len(answered))


def calculate_streak(questions: Sequence[Question], from_index: Optional[int] = None) -> int:
    """
    Count consecutive correct answers walking backwards from ``from_index``
    (the last question by default). Unanswered questions are skipped; the
    first wrong answer ends the streak.
    """
    if from_index is None:
        from_index = len(questions) - 1

    streak = 0
    for i in range(from_index, -1, -1):
        question = questions[i]
        if not question.is_answered:
            continue
        if not question.is_correct:
            break
        streak += 1
    return streak


def is_streak_milestone(streak: int, milestones=PracticeConfig.STREAK_MILESTONES) -> bool:
    return streak in milestones


def next_milestone(streak: int, milestones=PracticeConfig.STREAK_MILESTONES) -> Optional[int]:
    for milestone in milestones:
        if milestone > streak:
            return milestone
    return None


def progress_to_next_milestone(streak: int, milestones=PracticeConfig.STREAK_MILESTONES) -> StreakProgress:
    upcoming = next_milestone(streak, milestones)
    if upcoming is None:
        return StreakProgress(current=streak, next_milestone=None, percentage=100)

    previous = 0
    for milestone in milestones:
        if milestone < streak:
            previous = milestone
        else:
            break

    progress = percentage(streak - previous, upcoming - previous)
    return StreakProgress(current=streak, next_milestone=upcoming, percentage=min(progress, 100))
