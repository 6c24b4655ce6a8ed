"""Practice session aggregate."""

from datetime import datetime, timezone

from sqlalchemy.types import JSON

from ..db_instance import db
from .enums import PracticeMode, SessionStatus, enum_values


class PracticeSession(db.Model):
    """
    One quiz attempt: the fixed flag sequence, the generated questions and progress.

    ``active_marker`` carries the owner's id while the session is active and is
    NULL once it is terminal. The UNIQUE constraint on it is what guarantees a
    single active session per user.
    """
    __tablename__ = 'practice_sessions'

    session_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)

    mode = db.Column(
        db.Enum(PracticeMode, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
    )
    session_length = db.Column(db.Integer, nullable=False)
    flag_ids = db.Column(JSON, nullable=False, default=list)
    # NULL only for legacy sessions created before question generation existed
    questions = db.Column(JSON, nullable=True)

    current_index = db.Column(db.Integer, nullable=False, default=0)
    correct_count = db.Column(db.Integer, nullable=False, default=0)
    score = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(
        db.Enum(SessionStatus, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=SessionStatus.ACTIVE,
        index=True,
    )
    active_marker = db.Column(db.Integer, nullable=True, unique=True)

    started_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # Time spent generating questions (ms)
    generation_time_ms = db.Column(db.Integer, nullable=True)

    def to_dict(self):
        """Serialize session to dictionary (questions excluded)."""
        return {
            'session_id': self.session_id,
            'user_id': self.user_id,
            'mode': self.mode.value,
            'session_length': self.session_length,
            'flag_ids': list(self.flag_ids or []),
            'current_index': self.current_index,
            'correct_count': self.correct_count,
            'score': self.score,
            'status': self.status.value,
            'total_questions': len(self.questions) if self.questions is not None else 0,
            'has_questions': self.questions is not None,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'progress_percentage': self.progress_percentage,
            'generation_time_ms': self.generation_time_ms,
        }

    @property
    def is_active(self):
        return self.status == SessionStatus.ACTIVE

    @property
    def progress_percentage(self):
        total = len(self.flag_ids or [])
        if not total:
            return 0
        return min(100, int((self.current_index / total) * 100))

    def __repr__(self):
        return f"<PracticeSession {self.session_id} user={self.user_id} {self.status.value}>"
