"""Application service: Update Order Status use case (farmer side)."""

from __future__ import annotations

import structlog

from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.order import OrderStatus
from farmbox.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str, status: str) -> None:
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid status '{status}'")

        order = self._order_repo.get_by_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")

        previous = order.status
        order.transition_to(new_status)
        self._order_repo.save(order)
        logger.info(
            "order_status_changed",
            order_number=order_number,
            from_status=previous.value,
            to_status=new_status.value,
        )
