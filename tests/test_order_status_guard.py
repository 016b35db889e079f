"""Tests for app.domain.services.order_status_guard : order lifecycle transitions."""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import product

import pytest

from app.domain.errors import InvalidTransition
from app.domain.models.order import Order
from app.domain.services.constants import ALLOWED_TRANSITIONS, ORDER_STATUSES
from app.domain.services.order_status_guard import (
    allowed_transitions,
    apply_transition,
    is_terminal,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

LEGAL = {(src, dst) for src, nxt in ALLOWED_TRANSITIONS.items() for dst in nxt}
ILLEGAL = sorted(set(product(ORDER_STATUSES, ORDER_STATUSES)) - LEGAL)


def _order(status="pending", **kw) -> Order:
    return Order(order_id="ord-1", status=status, **kw)


class TestTransitionTable:
    @pytest.mark.parametrize("src,dst", sorted(LEGAL))
    def test_legal_transitions_append_one_entry(self, src, dst):
        result = apply_transition(_order(src), dst, now=NOW)
        assert result.order.status == dst
        assert len(result.order.status_history) == 1
        assert result.order.status_history[-1].status == dst
        assert result.previous_status == src

    @pytest.mark.parametrize("src,dst", ILLEGAL)
    def test_illegal_transitions_raise(self, src, dst):
        with pytest.raises(InvalidTransition) as exc:
            apply_transition(_order(src), dst)
        assert exc.value.from_status == src
        assert exc.value.to_status == dst
        assert exc.value.allowed == list(ALLOWED_TRANSITIONS[src])

    @pytest.mark.parametrize("terminal", ["delivered", "cancelled"])
    def test_terminal_states_never_move(self, terminal):
        assert is_terminal(terminal)
        assert allowed_transitions(terminal) == []
        for dst in ORDER_STATUSES:
            with pytest.raises(InvalidTransition):
                apply_transition(_order(terminal), dst)

    def test_unknown_target_is_invalid(self):
        with pytest.raises(InvalidTransition):
            apply_transition(_order("pending"), "refunded")


class TestApplyTransition:
    def test_pending_to_shipped_then_processing(self):
        order = _order("pending")
        with pytest.raises(InvalidTransition) as exc:
            apply_transition(order, "shipped")
        assert exc.value.to_dict()["allowed_transitions"] == ["processing", "cancelled"]
        assert exc.value.from_status == "pending"

        result = apply_transition(order, "processing", now=NOW)
        assert result.order.status == "processing"
        assert len(result.order.status_history) == 1

    def test_entry_fields(self):
        result = apply_transition(_order(), "processing", "pago confirmado", changed_by="ops@tienda.co", now=NOW)
        entry = result.entry
        assert entry.status == "processing"
        assert entry.timestamp == NOW
        assert entry.notes == "pago confirmado"
        assert entry.changed_by == "ops@tienda.co"
        assert result.order.updated_at == NOW

    def test_notes_default_to_empty(self):
        result = apply_transition(_order(), "cancelled")
        assert result.entry.notes == ""
        assert result.entry.changed_by == "admin"

    def test_tracking_number_only_on_shipped(self):
        shipped = apply_transition(_order("processing"), "shipped", tracking_number="SRV-123")
        assert shipped.order.tracking_number == "SRV-123"

        cancelled = apply_transition(_order("processing"), "cancelled", tracking_number="SRV-123")
        assert cancelled.order.tracking_number is None

    def test_history_is_append_only(self):
        order = _order()
        first = apply_transition(order, "processing", now=NOW).order
        second = apply_transition(first, "shipped", tracking_number="X1").order
        third = apply_transition(second, "delivered").order

        assert [h.status for h in third.status_history] == ["processing", "shipped", "delivered"]
        assert third.status_history[0] == first.status_history[0]
        assert len(first.status_history) == 1
        assert len(second.status_history) == 2
        assert third.tracking_number == "X1"

    def test_input_order_untouched(self):
        order = _order(customer_email="ana@correo.co")
        apply_transition(order, "processing")
        assert order.status == "pending"
        assert order.status_history == []

    def test_other_fields_preserved(self):
        order = Order(order_id="ord-9", status="pending", customer_email="ana@correo.co", total=125000)
        result = apply_transition(order, "processing")
        assert result.order.customer_email == "ana@correo.co"
        assert result.order.total == 125000
