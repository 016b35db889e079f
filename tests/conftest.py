"""Shared fixtures: settings env and a small routine catalog."""

from __future__ import annotations

import os

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "kbeauty_test")

from typing import List  # noqa: E402

import pytest  # noqa: E402

from app.domain.models.product import ProductLite  # noqa: E402
from fakes import FakeRedis, make_product  # noqa: E402


@pytest.fixture
def catalog() -> List[ProductLite]:
    return [
        make_product("cleanser", "limpiadores", ["Seca"]),
        make_product("cleanser-2", "Limpiadores", ["Grasa"]),
        make_product("exfoliant", "exfoliantes", ["Grasa"]),
        make_product("toner", "tónicos", ["Seca"]),
        make_product("essence", "esencias", ["Todo tipo de piel"]),
        make_product("serum", "serums", ["Mixta"]),
        make_product("mask", "mascarillas", []),
        make_product("cream", "hidratantes", ["Seca"]),
        make_product("spf", "protectores", ["Todos"]),
    ]


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
