from typing import Optional
from app.domain.models.product import RecommendationResult
import hashlib
import json

def _h(limit, catalog_size):
    """
    Short hash of the query parameters that change the result.
    """
    s = json.dumps({"k": limit, "n": catalog_size}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(s.encode()).hexdigest()[:10]

class RecoProductsCacheRepo:
    """
    Adapter for caching routine recommendations in Redis.
    Stores and retrieves RecommendationResult payloads; no business logic here.
    """
    def __init__(self, redis, key_prefix: str):
        self.cache = redis
        self.prefix = key_prefix

    def key(self, version: str, product_id: str, limit: int, catalog_size: int) -> str:
        return f"{version}:{self.prefix}:{product_id}:{_h(limit, catalog_size)}"

    async def get(self, key: str) -> Optional[RecommendationResult]:
        raw = await self.cache.get(key)
        if raw:
            return RecommendationResult.model_validate_json(raw)
        return None

    async def set(self, key: str, result: RecommendationResult, ttl: int) -> None:
        await self.cache.set(key, result.model_dump_json(), ex=ttl)
