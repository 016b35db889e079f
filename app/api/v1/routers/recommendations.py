# app/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Annotated
import time
import logging

from app.api.deps import product_repo_dep, redis_dep
from app.core.versioning import resolve_version
from app.domain.errors import ProductNotFound
from app.domain.models.product import RecommendationResult
from app.domain.services.constants import DEFAULT_RECOMMENDATIONS, MAX_RECOMMENDATIONS
from app.domain.services.recommendations_svc import get_routine_recommendations_cached

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

VersionDep = Annotated[str, Depends(resolve_version)]

@router.get("/recommendations", response_model=RecommendationResult)
async def routine_recommendations(
    version: VersionDep,
    product_id: str = Query(..., min_length=1, description="Reference product"),
    limit: int = Query(DEFAULT_RECOMMENDATIONS, ge=1, description=f"Capped at {MAX_RECOMMENDATIONS}"),
    product_repo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
) -> RecommendationResult:
    """
    Complementary next-step products for a skincare routine.
    Same-category items are never suggested; each item carries a one-line reason.
    """
    logger.info("Request: recommendations product_id=%s, version=%s, limit=%s", product_id, version, limit)
    start_time = time.perf_counter()

    try:
        res = await get_routine_recommendations_cached(
            product_repo,
            redis,
            version=version,
            product_id=product_id,
            limit=min(limit, MAX_RECOMMENDATIONS),
        )
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="Product not found.")

    logger.info(
        "Response: recommendations product_id=%s, count=%s, elapsed_time=%.4fs",
        product_id, res.count, time.perf_counter() - start_time,
    )
    return res
