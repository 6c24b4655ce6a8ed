from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from flagstack_app.models.enums import PracticeMode, SessionStatus


@dataclass(frozen=True)
class SessionRecord:
    """The fields of one session the aggregator needs."""

    status: SessionStatus
    mode: PracticeMode
    score: int
    started_at: Optional[datetime]
    flag_count: int

    @classmethod
    def from_model(cls, session) -> 'SessionRecord':
        return cls(
            status=SessionStatus(session.status),
            mode=PracticeMode(session.mode),
            score=session.score,
            started_at=session.started_at,
            flag_count=len(session.flag_ids or ()),
        )


@dataclass(frozen=True)
class UserPracticeStats:
    total_sessions: int = 0
    completed_sessions: int = 0
    average_score: float = 0.0
    last_practiced: Optional[datetime] = None
    total_flags_practiced: int = 0
    favorite_mode: Optional[PracticeMode] = None

    def to_dict(self) -> dict:
        return {
            'total_sessions': self.total_sessions,
            'completed_sessions': self.completed_sessions,
            'average_score': self.average_score,
            'last_practiced': self.last_practiced.isoformat() if self.last_practiced else None,
            'total_flags_practiced': self.total_flags_practiced,
            'favorite_mode': self.favorite_mode.value if self.favorite_mode else None,
        }
