"""
Pairwise similarity between catalog flags, used to pick plausible distractors.

Visual similarity drives ``match`` mode (pick the image for a meaning) and
semantic similarity drives ``learn`` mode (pick the name for an image).
All scores are in [0, 1]; comparing a flag with itself always gives 0.
"""

from typing import Callable, Dict, Iterable, List, Tuple

from flagstack_app.models.enums import PracticeMode
from flagstack_app.modules.catalog.schemas import CatalogItem

COLOR_WEIGHT = 0.5
PATTERN_WEIGHT = 0.3
VISUAL_TYPE_WEIGHT = 0.2

NAME_WEIGHT = 0.7
SEMANTIC_TYPE_WEIGHT = 0.3


def color_similarity(a: CatalogItem, b: CatalogItem) -> float:
    """Jaccard similarity of the two color sets (case-insensitive)."""
    if not a.colors and not b.colors:
        return 1.0
    if not a.colors or not b.colors:
        return 0.0

    colors_a = {c.lower() for c in a.colors}
    colors_b = {c.lower() for c in b.colors}
    return len(colors_a & colors_b) / len(colors_a | colors_b)


def pattern_similarity(a: CatalogItem, b: CatalogItem) -> float:
    pattern_a = a.pattern.lower() if a.pattern else None
    pattern_b = b.pattern.lower() if b.pattern else None

    if not pattern_a and not pattern_b:
        return 0.5
    if not pattern_a or not pattern_b:
        return 0.0
    if pattern_a == pattern_b:
        return 1.0
    return 0.3


def type_similarity(a: CatalogItem, b: CatalogItem) -> float:
    if a.type == b.type:
        return 1.0
    if a.category == b.category:
        return 0.5
    return 0.0


def name_similarity(a: CatalogItem, b: CatalogItem) -> float:
    """Heuristic for how easily two names get confused."""
    name_a = a.name.lower()
    name_b = b.name.lower()
    score = 0.0

    if name_a[:1] == name_b[:1]:
        score += 0.4

    length_diff = abs(len(name_a) - len(name_b))
    if length_diff == 0:
        score += 0.3
    elif length_diff <= 2:
        score += 0.15

    if name_b[:3] in name_a or name_a[:3] in name_b:
        score += 0.3

    return min(score, 1.0)


def visual_similarity(target: CatalogItem, candidate: CatalogItem) -> float:
    if target.id == candidate.id:
        return 0.0
    return (
        color_similarity(target, candidate) * COLOR_WEIGHT
        + pattern_similarity(target, candidate) * PATTERN_WEIGHT
        + type_similarity(target, candidate) * VISUAL_TYPE_WEIGHT
    )


def semantic_similarity(target: CatalogItem, candidate: CatalogItem) -> float:
    if target.id == candidate.id:
        return 0.0
    return (
        name_similarity(target, candidate) * NAME_WEIGHT
        + type_similarity(target, candidate) * SEMANTIC_TYPE_WEIGHT
    )


SIMILARITY_BY_MODE: Dict[PracticeMode, Callable[[CatalogItem, CatalogItem], float]] = {
    PracticeMode.LEARN: semantic_similarity,
    PracticeMode.MATCH: visual_similarity,
}


def rank_by_similarity(
    target: CatalogItem,
    candidates: Iterable[CatalogItem],
    mode: PracticeMode,
) -> List[Tuple[CatalogItem, float]]:
    """Score every candidate except ``target``, most similar first (stable on ties)."""
    scorer = SIMILARITY_BY_MODE[mode]
    scored = [(c, scorer(target, c)) for c in candidates if c.id != target.id]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored
