# app/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Any, List, Optional
import json
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.domain.models.product import ProductLite

logger = logging.getLogger(__name__)

LITE_PROJECTION = {
    "_id": 0,
    "product_id": 1,
    "name": 1,
    "brand": 1,
    "category": 1,
    "skin_type": 1,
    "benefits": 1,
    "price": 1,
    "compare_at_price": 1,
    "image": 1,
}

def parse_json_field(field: Any, fallback: list) -> list:
    """
    Label columns may hold a native array or a JSON-encoded string,
    depending on who wrote the document. Anything else -> fallback.
    """
    if isinstance(field, list):
        return field
    if isinstance(field, str):
        try:
            parsed = json.loads(field)
        except ValueError:
            return fallback
        return parsed if isinstance(parsed, list) else fallback
    return fallback

def to_product_lite(doc: dict) -> ProductLite:
    return ProductLite(
        product_id=str(doc.get("product_id")),
        name=doc.get("name") or "",
        brand=doc.get("brand") or "",
        category=doc.get("category") or "",
        skin_type=parse_json_field(doc.get("skin_type"), []),
        benefits=parse_json_field(doc.get("benefits"), []),
        price=doc.get("price") or 0,
        compare_at_price=doc.get("compare_at_price"),
        image=doc.get("image") or "",
    )

class ProductRepo:
    """
    Read-only catalog access backed by the 'products' collection.
    Returns normalized ProductLite snapshots of active products.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def get_active(self, product_id: str) -> Optional[ProductLite]:
        doc = await self.col.find_one({"product_id": product_id, "is_active": True}, LITE_PROJECTION)
        return to_product_lite(doc) if doc else None

    async def list_active_catalog(self, exclude_id: str, limit: int = 30) -> List[ProductLite]:
        cursor = self.col.find(
            {"is_active": True, "product_id": {"$ne": exclude_id}},
            LITE_PROJECTION,
        ).limit(limit)
        docs = await cursor.to_list(length=limit)
        logger.debug("catalog snapshot exclude_id=%s n=%s", exclude_id, len(docs))
        return [to_product_lite(d) for d in docs]
