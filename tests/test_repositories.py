"""Repository tests against an in-memory Motor double (mongomock-motor)."""

from __future__ import annotations

import pytest
from mongomock_motor import AsyncMongoMockClient

from app.domain.errors import InvalidTransition
from app.domain.models.order import Order
from app.domain.repositories.order_repo import OrderRepo, status_precondition
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.order_status_guard import apply_transition
from app.domain.services.order_status_svc import change_order_status


@pytest.fixture
def db():
    return AsyncMongoMockClient()["kbeauty_test"]


# ── OrderRepo ────────────────────────────────────────────────────────────────


class TestOrderRepo:
    async def test_get_missing(self, db):
        assert await OrderRepo(db).get("nope") is None

    async def test_null_status_reads_as_pending(self, db):
        await db["orders"].insert_one({"order_id": "o1", "status": None, "status_history": None})
        order = await OrderRepo(db).get("o1")
        assert order.status == "pending"
        assert order.status_history == []

    async def test_matching_write(self, db):
        await db["orders"].insert_one({"order_id": "o1", "status": "pending", "customer_email": "ana@correo.co", "total": 98000})
        repo = OrderRepo(db)
        order = await repo.get("o1")
        result = apply_transition(order, "processing", "pago ok", changed_by="ops")

        stored = await repo.update_status_if_current(result.order, "pending")
        assert stored is not None
        assert stored.status == "processing"

        doc = await db["orders"].find_one({"order_id": "o1"})
        assert doc["status"] == "processing"
        assert [h["status"] for h in doc["status_history"]] == ["processing"]
        assert doc["status_history"][0]["changed_by"] == "ops"
        assert doc["customer_email"] == "ana@correo.co"
        assert doc["total"] == 98000
        assert "tracking_number" not in doc

    async def test_stale_expected_status_is_rejected(self, db):
        await db["orders"].insert_one({"order_id": "o1", "status": "processing"})
        repo = OrderRepo(db)
        # read while pending; another writer has since moved it to processing
        stale = Order(order_id="o1", status="pending")
        result = apply_transition(stale, "cancelled")

        assert await repo.update_status_if_current(result.order, "pending") is None
        doc = await db["orders"].find_one({"order_id": "o1"})
        assert doc["status"] == "processing"
        assert "status_history" not in doc

    async def test_tracking_number_written_on_ship(self, db):
        await db["orders"].insert_one({"order_id": "o1", "status": "processing"})
        repo = OrderRepo(db)
        result = apply_transition(await repo.get("o1"), "shipped", tracking_number="SRV-7")
        await repo.update_status_if_current(result.order, "processing")
        doc = await db["orders"].find_one({"order_id": "o1"})
        assert doc["tracking_number"] == "SRV-7"

    def test_pending_precondition_covers_missing_status(self):
        assert status_precondition("pending") == {"$in": ["pending", None]}
        assert status_precondition("shipped") == "shipped"


class TestChangeOrderStatusWithMongo:
    async def test_missing_status_field(self, db):
        await db["orders"].insert_one({"order_id": "o1"})
        result = await change_order_status(OrderRepo(db), order_id="o1", status="processing")
        assert result.previous_status == "pending"
        doc = await db["orders"].find_one({"order_id": "o1"})
        assert doc["status"] == "processing"
        assert len(doc["status_history"]) == 1

    async def test_null_status(self, db):
        await db["orders"].insert_one({"order_id": "o2", "status": None})
        await change_order_status(OrderRepo(db), order_id="o2", status="processing")
        doc = await db["orders"].find_one({"order_id": "o2"})
        assert doc["status"] == "processing"

    async def test_history_grows_by_one_per_transition(self, db):
        await db["orders"].insert_one({"order_id": "o3", "status": "pending"})
        repo = OrderRepo(db)
        for status in ("processing", "shipped", "delivered"):
            await change_order_status(repo, order_id="o3", status=status)
        doc = await db["orders"].find_one({"order_id": "o3"})
        assert [h["status"] for h in doc["status_history"]] == ["processing", "shipped", "delivered"]
        with pytest.raises(InvalidTransition):
            await change_order_status(repo, order_id="o3", status="cancelled")


# ── ProductRepo ──────────────────────────────────────────────────────────────


@pytest.fixture
async def products(db):
    await db["products"].insert_many([
        {"product_id": "a", "name": "Gel limpiador", "category": "limpiadores", "skin_type": ["Seca"], "is_active": True},
        {"product_id": "b", "name": "Tónico", "category": "tónicos", "skin_type": '["Seca"]', "is_active": True},
        {"product_id": "c", "name": "Sérum", "category": "serums", "skin_type": None, "is_active": False},
        {"product_id": "d", "name": "Crema", "category": None, "is_active": True},
        {"product_id": "e", "name": "Protector", "category": "protectores", "is_active": True},
    ])
    return ProductRepo(db)


class TestProductRepo:
    async def test_get_active(self, products):
        p = await products.get_active("b")
        assert p.skin_type == ["Seca"]
        assert await products.get_active("c") is None
        assert await products.get_active("zzz") is None

    async def test_catalog_excludes_reference_and_inactive(self, products):
        catalog = await products.list_active_catalog(exclude_id="a")
        ids = sorted(p.product_id for p in catalog)
        assert ids == ["b", "d", "e"]
        assert next(p for p in catalog if p.product_id == "d").category == ""

    async def test_catalog_limit(self, products):
        catalog = await products.list_active_catalog(exclude_id="a", limit=2)
        assert len(catalog) == 2
        assert all(p.product_id not in {"a", "c"} for p in catalog)
