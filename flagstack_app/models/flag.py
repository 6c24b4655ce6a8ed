"""Reference catalog: maritime signal flags."""

from __future__ import annotations

from sqlalchemy.types import JSON

from ..db_instance import db
from .enums import Difficulty, FlagType, enum_values


class Flag(db.Model):
    """One catalog item. Read-only to the practice engine."""

    __tablename__ = 'flags'

    flag_id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    type = db.Column(
        db.Enum(FlagType, native_enum=False, values_callable=enum_values, length=32),
        nullable=False,
        index=True,
    )
    category = db.Column(db.String(64), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    meaning = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False, default='')

    image_path = db.Column(db.String(255), nullable=False)
    colors = db.Column(JSON, nullable=False, default=list)
    pattern = db.Column(db.String(64), nullable=True)
    tips = db.Column(db.Text, nullable=True)

    phonetic = db.Column(db.String(64), nullable=True)
    difficulty = db.Column(
        db.Enum(Difficulty, native_enum=False, values_callable=enum_values, length=20),
        nullable=True,
    )

    # Canonical enumeration sequence
    order = db.Column(db.Integer, unique=True, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            'id': self.flag_id,
            'key': self.key,
            'type': self.type.value,
            'category': self.category,
            'name': self.name,
            'meaning': self.meaning,
            'description': self.description,
            'image_path': self.image_path,
            'colors': list(self.colors or []),
            'pattern': self.pattern,
            'tips': self.tips,
            'phonetic': self.phonetic,
            'difficulty': self.difficulty.value if self.difficulty else None,
            'order': self.order,
        }

    def __repr__(self):
        return f"<Flag {self.key} #{self.order}>"
