"""Progress summary shown alongside the current question."""

from ..schemas import GeneratedQuestions, ProgressSummary, SessionSnapshot
from .scoring import calculate_accuracy, calculate_streak, progress_to_next_milestone


def build_progress(snapshot: SessionSnapshot) -> ProgressSummary:
    questions = snapshot.questions.questions if isinstance(snapshot.questions, GeneratedQuestions) else ()
    answered = sum(1 for q in questions if q.is_answered)
    correct = sum(1 for q in questions if q.is_correct)

    # Streak runs back from the most recently answered question
    streak = calculate_streak(questions, snapshot.current_index - 1) if snapshot.current_index > 0 else 0

    return ProgressSummary(
        current_index=snapshot.current_index,
        total=len(questions),
        correct=correct,
        incorrect=answered - correct,
        streak=streak,
        accuracy=calculate_accuracy(questions),
        streak_progress=progress_to_next_milestone(streak),
    )
