"""
Timing helpers for slow-path observability.

Used around session generation: the duration is measured and a warning is
logged when it crosses a configurable threshold. Nothing here changes the
result of the measured call.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, TypeVar

from ..core.logging_config import get_logger

T = TypeVar("T")

logger = get_logger("performance")


@dataclass(frozen=True)
class PerformanceMetrics:
    operation_name: str
    started_at: float
    ended_at: float

    @property
    def duration_ms(self) -> int:
        return int(round((self.ended_at - self.started_at) * 1000))


def measure(operation: Callable[[], T], operation_name: str) -> Tuple[T, PerformanceMetrics]:
    """Run ``operation`` and return its result together with timing metrics."""
    started = time.perf_counter()
    try:
        result = operation()
    except Exception:
        elapsed = int(round((time.perf_counter() - started) * 1000))
        logger.error("[Performance] %s failed after %sms", operation_name, elapsed)
        raise
    return result, PerformanceMetrics(operation_name, started, time.perf_counter())


def measure_and_warn(
    operation: Callable[[], T],
    operation_name: str,
    threshold_ms: int = 2000,
    log: Optional[logging.Logger] = None,
) -> Tuple[T, PerformanceMetrics]:
    """Like :func:`measure`, logging a warning when ``threshold_ms`` is exceeded."""
    log = log or logger
    result, metrics = measure(operation, operation_name)
    if metrics.duration_ms > threshold_ms:
        log.warning(
            "[Performance Warning] %s took %sms (threshold: %sms)",
            operation_name, metrics.duration_ms, threshold_ms,
        )
    else:
        log.debug("[Performance] %s completed in %sms", operation_name, metrics.duration_ms)
    return result, metrics
