"""
Randomization primitives for session generation.
Pure logic - no Database access, no Flask.
"""

import random
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar('T')

RandomFn = Callable[[], float]

# Numerical Recipes LCG parameters
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2 ** 32


def shuffle(items: Sequence[T], random_fn: RandomFn = random.random) -> List[T]:
    """Fisher-Yates shuffle over a copy of ``items``."""
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = int(random_fn() * (i + 1))
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def seeded_random(seed: int) -> RandomFn:
    """Return a deterministic generator of floats in [0, 1) for ``seed``."""
    state = seed

    def _next() -> float:
        nonlocal state
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return state / _LCG_MODULUS

    return _next


def shuffle_seeded(items: Sequence[T], seed: int) -> List[T]:
    return shuffle(items, seeded_random(seed))


def distribute_answer_positions(
    question_count: int,
    seed: Optional[int] = None,
    option_count: int = 4,
) -> List[int]:
    """
    Assign a correct-answer slot to each question.

    Slots are filled round-robin (``i % option_count``) and then shuffled, so
    every slot is used either floor(n/k) or ceil(n/k) times without a
    repeating A, B, C, D pattern.
    """
    positions = [i % option_count for i in range(question_count)]
    if seed is None:
        return shuffle(positions)
    return shuffle_seeded(positions, seed)


def select_random_items(items: Sequence[T], count: int, random_fn: RandomFn = random.random) -> List[T]:
    """Pick ``count`` distinct items. Raises ValueError if the pool is too small."""
    if count > len(items):
        raise ValueError(f"Cannot select {count} items from a pool of {len(items)}")
    return shuffle(items, random_fn)[:count]
