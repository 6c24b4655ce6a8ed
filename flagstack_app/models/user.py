"""User model synced from the external identity provider."""

from __future__ import annotations

from datetime import datetime, timezone

from flask_login import UserMixin

from ..db_instance import db
from .enums import UserRole, enum_values


class User(UserMixin, db.Model):
    """Application user.

    Credentials never reach this service: ``external_id`` is the stable
    subject handed over by the identity provider.
    """

    __tablename__ = 'users'

    user_id = db.Column(db.Integer, primary_key=True)
    external_id = db.Column(db.String(191), unique=True, nullable=False, index=True)
    email = db.Column(db.String(191), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=True)
    role = db.Column(
        db.Enum(UserRole, native_enum=False, values_callable=enum_values, length=20),
        default=UserRole.CADET,
        nullable=False,
    )
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    practice_sessions = db.relationship(
        'PracticeSession',
        backref='user',
        lazy='select',
        cascade='all, delete-orphan',
    )

    def get_id(self) -> str:
        return str(self.user_id)

    def to_dict(self) -> dict:
        return {
            'user_id': self.user_id,
            'external_id': self.external_id,
            'email': self.email,
            'name': self.name,
            'role': self.role.value if self.role else None,
        }

    def __repr__(self):
        return f"<User {self.user_id}: {self.external_id}>"
