"""Abstract repository for Subscription aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmbox.domain.model.subscription import Subscription


class SubscriptionRepository(ABC):

    @abstractmethod
    def get_by_id(self, subscription_id: int) -> Subscription | None:
        """Return a subscription by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, customer_id: str | None = None) -> list[Subscription]:
        """Return every subscription, optionally one customer's."""

    @abstractmethod
    def save(self, subscription: Subscription) -> None:
        """Persist a new or updated subscription, assigning an ID if new."""
