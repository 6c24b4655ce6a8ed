"""
Catalog Service - read access to the flag catalog plus the seeding helpers
used by ``seed_flags.py``.
"""

import json
import os
from typing import Iterable, List, Optional

from flask import current_app

from flagstack_app.core.error_handlers import DataIntegrityError, ValidationError
from flagstack_app.models import Difficulty, Flag, FlagType, db
from flagstack_app.utils.db_session import safe_commit
from ..schemas import CatalogItem, SeedResult

BUNDLED_FLAGS_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data', 'flags.json')

_SEED_FIELDS = (
    'type', 'category', 'name', 'meaning', 'description', 'image_path',
    'colors', 'pattern', 'tips', 'phonetic', 'difficulty', 'order',
)


def load_bundled_flags(path: str = BUNDLED_FLAGS_PATH) -> List[dict]:
    """Read the ICS flag set shipped with the package."""
    with open(path, encoding='utf-8') as handle:
        return json.load(handle)


def _coerce_record(record: dict) -> dict:
    """Validate one seed record and convert enum fields."""
    missing = [name for name in ('key', 'type', 'category', 'name', 'meaning', 'image_path', 'order')
               if record.get(name) in (None, '')]
    if missing:
        raise ValidationError(
            f"Seed record {record.get('key', '<unknown>')} is missing fields",
            errors={'missing': missing},
        )

    values = {name: record.get(name) for name in _SEED_FIELDS}
    try:
        values['type'] = FlagType(values['type'])
        values['difficulty'] = Difficulty(values['difficulty']) if values['difficulty'] else None
    except ValueError as exc:
        raise ValidationError(f"Seed record {record['key']} has an invalid value: {exc}") from exc

    values['description'] = values['description'] or ''
    values['colors'] = list(values['colors'] or [])
    return values


class CatalogService:
    @staticmethod
    def list_flags() -> List[CatalogItem]:
        """All flags in canonical order."""
        flags = Flag.query.order_by(Flag.order.asc()).all()
        return [CatalogItem.from_model(f) for f in flags]

    @staticmethod
    def get_flag(key: str) -> Optional[CatalogItem]:
        flag = Flag.query.filter_by(key=key).first()
        return CatalogItem.from_model(flag) if flag else None

    @staticmethod
    def list_by_category(category: str) -> List[CatalogItem]:
        flags = Flag.query.filter_by(category=category).order_by(Flag.order.asc()).all()
        return [CatalogItem.from_model(f) for f in flags]

    @staticmethod
    def list_by_type(flag_type: FlagType) -> List[CatalogItem]:
        flags = Flag.query.filter_by(type=flag_type).order_by(Flag.order.asc()).all()
        return [CatalogItem.from_model(f) for f in flags]

    @staticmethod
    def get_flags_by_ids(flag_ids: Iterable[int]) -> List[CatalogItem]:
        """
        Resolve ids to items, preserving the order of ``flag_ids``.

        Raises DataIntegrityError when any id no longer exists.
        """
        flag_ids = list(flag_ids)
        if not flag_ids:
            return []

        rows = Flag.query.filter(Flag.flag_id.in_(set(flag_ids))).all()
        by_id = {row.flag_id: row for row in rows}
        missing = [fid for fid in flag_ids if fid not in by_id]
        if missing:
            raise DataIntegrityError(
                'Referenced flags could not be resolved',
                details={'missing_flag_ids': missing},
            )
        return [CatalogItem.from_model(by_id[fid]) for fid in flag_ids]

    @staticmethod
    def count() -> int:
        return Flag.query.count()

    @staticmethod
    def seed_catalog(records: Iterable[dict]) -> SeedResult:
        """Upsert flags by ``key``. Running it twice only updates."""
        prepared = []
        for record in records:
            values = _coerce_record(record)
            prepared.append((values, record['key']))

        def _work():
            created = updated = 0
            for values, key in prepared:
                existing = Flag.query.filter_by(key=key).first()
                if existing:
                    for name, value in values.items():
                        setattr(existing, name, value)
                    updated += 1
                else:
                    db.session.add(Flag(key=key, **values))
                    created += 1
            return SeedResult(created=created, updated=updated)

        result = safe_commit(db.session, _work)
        current_app.logger.info(
            f"Catalog seeded. Created: {result.created}, Updated: {result.updated}"
        )
        return result

    @staticmethod
    def reset_catalog() -> int:
        """Delete every flag. Returns the number of rows removed."""
        deleted = safe_commit(db.session, lambda: Flag.query.delete())
        current_app.logger.warning(f"Catalog reset: {deleted} flags deleted")
        return deleted
