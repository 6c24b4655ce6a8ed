"""Utility helpers for working with the SQLAlchemy session.

SQLite places a write lock on the database for the duration of a
transaction, which can surface as a ``database is locked`` error when two
requests write at roughly the same time. :func:`safe_commit` retries the
unit of work with exponential backoff so short lived locks are retried
transparently.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.session import Session

LOCKED_MESSAGES = {"database is locked", "database is busy"}

T = TypeVar("T")


def _is_lock_error(error: OperationalError) -> bool:
    """Return ``True`` if the OperationalError was caused by a lock."""

    message = str(error).lower()
    return any(token in message for token in LOCKED_MESSAGES)


def safe_commit(
    session: Session,
    work: Optional[Callable[[], T]] = None,
    retries: int = 5,
    initial_delay: float = 0.1,
) -> Optional[T]:
    """Run ``work`` (if given) and commit, retrying when SQLite is locked.

    A rollback discards everything staged in the session, so a retry is
    only possible when ``work`` can stage the changes again. Without it the
    lock error is re-raised after the rollback.

    Args:
        session: The SQLAlchemy session to commit.
        work: Callable that stages the changes; re-run on every attempt.
        retries: Maximum number of attempts before the error is re-raised.
        initial_delay: The delay (in seconds) before the first retry. The
            delay is doubled after every attempt.

    Returns:
        Whatever ``work`` returned on the successful attempt.
    """

    delay = initial_delay
    for attempt in range(retries):
        try:
            result: Any = work() if work is not None else None
            session.commit()
            return result
        except OperationalError as exc:  # pragma: no cover - retriable path
            session.rollback()
            if work is None or attempt == retries - 1 or not _is_lock_error(exc):
                raise

            time.sleep(delay)
            delay *= 2
    return None
