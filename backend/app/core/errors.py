from __future__ import annotations


class PanelError(Exception):
    """Base class for domain errors raised below the HTTP layer."""


class CustomerNotFound(PanelError):
    """A customer id has no matching account or properties row.

    When raised while aggregating a reseller page it means the ownership
    query and the account tables disagree, so the whole render fails.
    """

    def __init__(self, customer_id: int):
        super().__init__(f"customer {customer_id} not found")
        self.customer_id = customer_id


class StoreError(PanelError):
    """Underlying data access failed (connectivity, timeout, ...)."""
