"""Application service: Cancel Order use case (customer side).

Customers may only cancel orders the farm has not confirmed yet. The
reason, if given, is kept in the order's internal notes.
"""

from __future__ import annotations

import structlog

from farmbox.domain.exceptions import EntityNotFoundError
from farmbox.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_number: str,
        reason: str | None = None,
        customer_id: str | None = None,
    ) -> None:
        order = self._order_repo.get_by_number(order_number)
        if order is None or (customer_id is not None and order.customer_id != customer_id):
            raise EntityNotFoundError(f"Order {order_number} not found")

        order.cancel_by_customer(reason)
        self._order_repo.save(order)
        logger.info("order_cancelled", order_number=order_number, reason=reason)
