from dataclasses import dataclass, field
from typing import Optional, Tuple

from flagstack_app.models.enums import Difficulty, FlagType


@dataclass(frozen=True)
class CatalogItem:
    """Immutable view of a ``Flag`` row handed to the practice engine."""

    id: int
    key: str
    type: FlagType
    category: str
    name: str
    meaning: str
    image_path: str
    order: int
    description: str = ''
    colors: Tuple[str, ...] = field(default_factory=tuple)
    pattern: Optional[str] = None
    tips: Optional[str] = None
    phonetic: Optional[str] = None
    difficulty: Optional[Difficulty] = None

    @classmethod
    def from_model(cls, flag) -> 'CatalogItem':
        return cls(
            id=flag.flag_id,
            key=flag.key,
            type=FlagType(flag.type),
            category=flag.category,
            name=flag.name,
            meaning=flag.meaning,
            image_path=flag.image_path,
            order=flag.order,
            description=flag.description or '',
            colors=tuple(flag.colors or ()),
            pattern=flag.pattern,
            tips=flag.tips,
            phonetic=flag.phonetic,
            difficulty=Difficulty(flag.difficulty) if flag.difficulty else None,
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'key': self.key,
            'type': self.type.value,
            'category': self.category,
            'name': self.name,
            'meaning': self.meaning,
            'description': self.description,
            'image_path': self.image_path,
            'colors': list(self.colors),
            'pattern': self.pattern,
            'tips': self.tips,
            'phonetic': self.phonetic,
            'difficulty': self.difficulty.value if self.difficulty else None,
            'order': self.order,
        }


@dataclass(frozen=True)
class SeedResult:
    created: int
    updated: int

    @property
    def total(self) -> int:
        return self.created + self.updated
