"""Pure aggregation over session records."""

from collections import Counter
from typing import Iterable, Optional

from flagstack_app.models.enums import PracticeMode, SessionStatus
from ..schemas import SessionRecord, UserPracticeStats


def favorite_mode(completed: Iterable[SessionRecord]) -> Optional[PracticeMode]:
    """Most frequent mode; ties go to the mode declared first in ``PracticeMode``."""
    counts = Counter(record.mode for record in completed)
    if not counts:
        return None
    declared = list(PracticeMode)
    return max(counts, key=lambda mode: (counts[mode], -declared.index(mode)))


def aggregate_practice_stats(records: Iterable[SessionRecord]) -> UserPracticeStats:
    records = list(records)
    completed = [r for r in records if r.status is SessionStatus.COMPLETED]

    average_score = sum(r.score for r in completed) / len(completed) if completed else 0.0
    started = [r.started_at for r in records if r.started_at is not None]

    return UserPracticeStats(
        total_sessions=len(records),
        completed_sessions=len(completed),
        average_score=average_score,
        last_practiced=max(started) if started else None,
        total_flags_practiced=sum(r.flag_count for r in completed),
        favorite_mode=favorite_mode(completed),
    )
