# app/domain/services/recommendation_engine.py
from __future__ import annotations
from typing import List, Sequence

from app.domain.models.product import ProductLite, Recommendation
from app.domain.services.constants import (
    ADJACENT_REASONS,
    CURATED_MAX_DISTANCE,
    DEFAULT_RECOMMENDATIONS,
    DEFAULT_STEP,
    FAR_PROXIMITY_SCORE,
    MATCHING_SKIN_BONUS,
    MAX_RECOMMENDATIONS,
    PROXIMITY_SCORES,
    REASON_AFTER,
    REASON_BEFORE,
    ROUTINE_ORDER,
    SAME_CATEGORY_SCORE,
    STEP_LABELS,
    UNIVERSAL_SKIN_BONUS,
    UNIVERSAL_SKIN_MARKERS,
)

"""
Note:
    - Pure functions over an in-memory catalog snapshot: no I/O, no logging.
    - The caller passes active products only; nothing is filtered here
      besides the reference product and same-category substitutes.
"""

def _norm(category: str | None) -> str:
    return (category or "").strip().lower()

def get_step(category: str | None) -> int:
    """Routine step (1-8) for a category label; unknown labels fall on the serum step."""
    return ROUTINE_ORDER.get(_norm(category), DEFAULT_STEP)

def step_label(category: str | None) -> str:
    return STEP_LABELS.get(get_step(category), category or "")

def _proximity(distance: int) -> int:
    return PROXIMITY_SCORES.get(distance, FAR_PROXIMITY_SCORE)

def _skin_bonus(current: ProductLite, candidate: ProductLite) -> int:
    current_types = {s.lower() for s in current.skin_type}
    candidate_types = [s.lower() for s in candidate.skin_type]

    if any(marker in s for s in candidate_types for marker in UNIVERSAL_SKIN_MARKERS):
        return UNIVERSAL_SKIN_BONUS
    if current_types.intersection(candidate_types):
        return MATCHING_SKIN_BONUS
    return 0

def score_product(current: ProductLite, candidate: ProductLite) -> int:
    """
    Cross-sell score of `candidate` for a shopper looking at `current`.
    Same category is a substitute, not a complement: vetoed with a negative score.
    Otherwise: routine proximity (+5/+3/+2/+1) plus skin-type fit (+2 universal, +3 shared).
    """
    if _norm(candidate.category) == _norm(current.category):
        return SAME_CATEGORY_SCORE

    distance = abs(get_step(current.category) - get_step(candidate.category))
    return _proximity(distance) + _skin_bonus(current, candidate)

def get_reason_text(current: ProductLite, recommended: ProductLite) -> str:
    current_step = get_step(current.category)
    recommended_step = get_step(recommended.category)

    if abs(current_step - recommended_step) <= CURATED_MAX_DISTANCE:
        pair = (min(current_step, recommended_step), max(current_step, recommended_step))
        if curated := ADJACENT_REASONS.get(pair):
            return curated

    label = STEP_LABELS.get(current_step, current.category).lower()
    if recommended_step < current_step:
        return REASON_BEFORE.format(label=label)
    return REASON_AFTER.format(label=label)

def get_recommendations(
    current: ProductLite,
    catalog: Sequence[ProductLite],
    limit: int = DEFAULT_RECOMMENDATIONS,
) -> List[Recommendation]:
    """
    Rank `catalog` against `current` and return at most min(limit, 10) items.
    Candidates scoring <= 0 are dropped. Equal scores keep catalog order
    (sorted() is stable).
    """
    limit = min(limit, MAX_RECOMMENDATIONS)
    if limit <= 0:
        return []

    scored = [
        (score_product(current, p), p)
        for p in catalog
        if p.product_id != current.product_id
    ]
    ranked = sorted((e for e in scored if e[0] > 0), key=lambda e: e[0], reverse=True)

    return [
        Recommendation(
            product=p,
            reason=get_reason_text(current, p),
            step=step_label(p.category),
        )
        for _, p in ranked[:limit]
    ]
