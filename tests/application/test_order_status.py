"""Integration tests for the order query, status and cancel use cases."""

from datetime import date

import pytest

from farmbox.application.cancel_order import CancelOrderHandler
from farmbox.application.show_order import ListOrdersHandler, ShowOrderHandler
from farmbox.application.update_order_status import UpdateOrderStatusHandler
from farmbox.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    ValidationError,
)
from farmbox.domain.model.order import (
    DeliveryMeta,
    DeliveryType,
    Order,
    OrderLineItem,
    OrderStatus,
)
from farmbox.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository


def _order(number: str, farm_id: str = "F1", customer_id: str = "c-1") -> Order:
    item = OrderLineItem("p1", "Tomatoes", Quantity(2), Money.of("10"))
    return Order.create(
        order_number=number,
        farm_id=farm_id,
        farm_name=f"Farm {farm_id}",
        items=[item],
        subtotal=Money.of("20"),
        delivery_fee=Money.of("5"),
        total=Money.of("25"),
        delivery=DeliveryMeta(DeliveryType.PICKUP, date(2026, 10, 21)),
        customer_id=customer_id,
    )


def _setup() -> FakeOrderRepository:
    repo = FakeOrderRepository()
    repo.save(_order("FB-1", "F1", "c-1"))
    repo.save(_order("FB-2", "F2", "c-1"))
    repo.save(_order("FB-3", "F1", "c-2"))
    return repo


class TestShowOrders:

    def test_show_by_number(self):
        dto = ShowOrderHandler(_setup()).handle("FB-2")
        assert dto.farm_id == "F2"
        assert dto.total == "25.000 TND"
        assert dto.items[0].quantity == 2

    def test_show_missing(self):
        with pytest.raises(EntityNotFoundError, match="Order FB-9 not found"):
            ShowOrderHandler(_setup()).handle("FB-9")

    def test_list_filters(self):
        handler = ListOrdersHandler(_setup())
        assert {d.order_number for d in handler.handle(customer_id="c-1")} == {"FB-1", "FB-2"}
        assert {d.order_number for d in handler.handle(farm_id="F1")} == {"FB-1", "FB-3"}
        assert handler.handle(status="DELIVERED") == []


class TestUpdateOrderStatus:

    def test_confirm(self):
        repo = _setup()
        UpdateOrderStatusHandler(repo).handle("FB-1", "CONFIRMED")
        order = repo.get_by_number("FB-1")
        assert order.status == OrderStatus.CONFIRMED
        assert order.confirmed_at is not None

    def test_invalid_status_name(self):
        with pytest.raises(ValidationError, match="Invalid status"):
            UpdateOrderStatusHandler(_setup()).handle("FB-1", "SHIPPED")

    def test_illegal_transition(self):
        with pytest.raises(InvalidTransitionError):
            UpdateOrderStatusHandler(_setup()).handle("FB-1", "DELIVERED")

    def test_missing_order(self):
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(_setup()).handle("FB-9", "CONFIRMED")


class TestCancelOrder:

    def test_customer_cancels_pending(self):
        repo = _setup()
        CancelOrderHandler(repo).handle("FB-1", reason="Ordered twice", customer_id="c-1")
        order = repo.get_by_number("FB-1")
        assert order.status == OrderStatus.CANCELLED
        assert order.internal_notes == "Customer cancelled: Ordered twice"

    def test_other_customer_sees_not_found(self):
        with pytest.raises(EntityNotFoundError):
            CancelOrderHandler(_setup()).handle("FB-1", customer_id="c-2")

    def test_confirmed_order_cannot_be_cancelled(self):
        repo = _setup()
        UpdateOrderStatusHandler(repo).handle("FB-1", "CONFIRMED")
        with pytest.raises(InvalidTransitionError, match="Only pending orders"):
            CancelOrderHandler(repo).handle("FB-1")
