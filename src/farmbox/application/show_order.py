"""Application service: Show Order / List Orders use cases (queries).

Everything shown comes from the order's own snapshot; nothing is
recomputed from live product prices.
"""

from __future__ import annotations

from farmbox.application.dto import OrderDTO
from farmbox.domain.exceptions import EntityNotFoundError
from farmbox.domain.model.order import OrderStatus
from farmbox.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str) -> OrderDTO:
        order = self._order_repo.get_by_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return OrderDTO.from_order(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        customer_id: str | None = None,
        farm_id: str | None = None,
        status: str | None = None,
    ) -> list[OrderDTO]:
        orders = self._order_repo.list_all(
            customer_id=customer_id,
            farm_id=farm_id,
            status=OrderStatus(status) if status else None,
        )
        return [OrderDTO.from_order(order) for order in orders]
