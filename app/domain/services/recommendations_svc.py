# app/domain/services/recommendations_svc.py
import logging
import time
from typing import Optional

from app.core.config import get_settings
from app.domain.errors import ProductNotFound
from app.domain.models.product import RecommendationResult
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.reco_product_cache_repo import RecoProductsCacheRepo
from app.domain.services.constants import DEFAULT_RECOMMENDATIONS, MAX_RECOMMENDATIONS
from app.domain.services.recommendation_engine import get_recommendations

logger = logging.getLogger(__name__)

async def get_routine_recommendations_cached(
    product_repo: ProductRepo,
    redis,
    *,
    version: str,
    product_id: str,
    limit: int = DEFAULT_RECOMMENDATIONS,
    settings=None,
) -> RecommendationResult:
    """
    Next-step routine products for `product_id`.
    - Loads the active reference product (ProductNotFound if missing/inactive).
    - Loads a bounded active-catalog snapshot and runs the scoring engine.
    - Caches the result in Redis when available (settings.recommendations_cache_ttl).
    """
    t0 = time.perf_counter()
    settings = settings or get_settings()
    limit = min(limit, MAX_RECOMMENDATIONS)
    catalog_size = settings.recommendations_catalog_size

    cache: Optional[RecoProductsCacheRepo] = (
        RecoProductsCacheRepo(redis, settings.recommendations_cache_prefix) if redis is not None else None
    )
    cache_key = cache.key(version, product_id, limit, catalog_size) if cache else None

    if cache:
        try:
            cached = await cache.get(cache_key)
            if cached is not None:
                logger.info("recs cache_hit key=%s items=%s total_time=%.3fs", cache_key, cached.count, time.perf_counter() - t0)
                return cached
        except Exception as e:
            logger.warning("recs redis.get error key=%s err=%s", cache_key, e)

    logger.info("recs cache_miss product_id=%s limit=%s catalog_size=%s", product_id, limit, catalog_size)

    # 1) Reference product
    current = await product_repo.get_active(product_id)
    if current is None:
        logger.info("recs no active product for product_id=%s", product_id)
        raise ProductNotFound(product_id)

    # 2) Catalog snapshot
    t_db = time.perf_counter()
    catalog = await product_repo.list_active_catalog(exclude_id=product_id, limit=catalog_size)
    logger.info("recs catalog n=%s db_time=%.3fs", len(catalog), time.perf_counter() - t_db)

    # 3) Score and rank
    items = get_recommendations(current, catalog, limit)
    result = RecommendationResult(source_product_id=product_id, items=items, count=len(items))
    logger.debug("recs ranked ids=%s", [r.product.product_id for r in items])

    # 4) Cache set
    if cache:
        try:
            await cache.set(cache_key, result, settings.recommendations_cache_ttl)
            logger.debug("recs cache_set key=%s ttl=%s", cache_key, settings.recommendations_cache_ttl)
        except Exception as e:
            logger.warning("recs redis.set error key=%s err=%s", cache_key, e)

    logger.info("recs done product_id=%s items=%s total_time=%.3fs", product_id, result.count, time.perf_counter() - t0)
    return result
