"""Fake supplier adapter — deterministic supplier for testing and development.

Accepts every order by default and answers status/tracking queries from a
script the test sets up. Failure can be switched on globally or for single
supplier orders to exercise the pipeline's failure paths.
"""

from dropshipping.exceptions import SupplierRequestError
from dropshipping.supplier.normalized import NormalizedOrder
from dropshipping.supplier.port import SupplierPort


class FakeSupplier(SupplierPort):
    """Fake supplier that always succeeds by default."""

    def __init__(self, prefix: str = "FAKE"):
        self.prefix = prefix
        self.should_succeed = True
        self.failure_reason = "Supplier unavailable"
        self.failing_order_ids: set[str] = set()
        self.statuses: dict[str, dict] = {}
        self.created_orders: list[NormalizedOrder] = []
        self.status_queries: list[str] = []
        self.tracking_queries: list[str] = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Supplier unavailable"):
        """Configure the fake supplier behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def fail_for(self, *supplier_order_ids: str) -> None:
        """Make status and tracking queries fail for these supplier orders only."""
        self.failing_order_ids.update(supplier_order_ids)

    def set_status(
        self,
        supplier_order_id: str,
        status: str,
        tracking_number: str | None = None,
        tracking_url: str | None = None,
    ) -> None:
        """Script the answer to status and tracking queries for a supplier order."""
        self.statuses[supplier_order_id] = {
            "supplier_order_id": supplier_order_id,
            "status": status,
            "tracking_number": tracking_number,
            "tracking_url": tracking_url,
        }

    def _check(self, supplier_order_id: str | None = None) -> None:
        if not self.should_succeed or (supplier_order_id and supplier_order_id in self.failing_order_ids):
            raise SupplierRequestError(self.failure_reason)

    def create_order(self, order: NormalizedOrder) -> dict:
        self._check()
        self.created_orders.append(order)
        return {
            "supplier_order_id": f"{self.prefix}-{order.order_id}",
            "status": "pending",
        }

    def get_order_status(self, supplier_order_id: str) -> dict:
        self.status_queries.append(supplier_order_id)
        self._check(supplier_order_id)
        return self.statuses.get(
            supplier_order_id,
            {"supplier_order_id": supplier_order_id, "status": "pending"},
        )

    def get_tracking(self, supplier_order_id: str) -> dict:
        self.tracking_queries.append(supplier_order_id)
        self._check(supplier_order_id)
        return self.statuses.get(
            supplier_order_id,
            {"supplier_order_id": supplier_order_id, "status": "pending"},
        )

    def reset(self):
        """Forget recorded calls and scripted answers (useful between tests)."""
        self.should_succeed = True
        self.failure_reason = "Supplier unavailable"
        self.failing_order_ids.clear()
        self.statuses.clear()
        self.created_orders.clear()
        self.status_queries.clear()
        self.tracking_queries.clear()
