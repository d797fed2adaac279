"""Query surface of the Order aggregate used by the pipeline jobs."""

from datetime import datetime

from protean import UnitOfWork
from protean.exceptions import ExpectedVersionError

from dropshipping.domain import dropshipping
from dropshipping.order.order import (
    AWAITING_SUPPLIER_STATUSES,
    Order,
    OrderStatus,
    PaymentStatus,
)


@dropshipping.repository(part_of=Order)
class OrderRepository:
    def _scoped(self, store_id: str | None = None, **filters):
        if store_id:
            filters["store_id"] = store_id
        return self._dao.query.filter(**filters)

    def find_awaiting_supplier(self, store_id: str | None = None, limit: int = 500) -> list[Order]:
        """Orders sent to a supplier that have not reached a terminal state."""
        statuses = [s.value for s in AWAITING_SUPPLIER_STATUSES]
        items = self._scoped(store_id, supplier_order_status__in=statuses).limit(limit).all().items
        return [order for order in items if order.supplier_order_id]

    def find_retry_candidates(
        self,
        max_attempts: int,
        store_id: str | None = None,
        limit: int = 500,
        include_flagged: bool = False,
    ) -> list[Order]:
        """Paid, processing orders that never reached a supplier and still have attempts left.

        Orders held for risk review stay out unless ``include_flagged`` is set.
        """
        items = (
            self._scoped(
                store_id,
                status=OrderStatus.PROCESSING.value,
                payment_status=PaymentStatus.PAID.value,
            )
            .limit(limit)
            .all()
            .items
        )
        return [
            order
            for order in items
            if not order.supplier_order_id
            and (order.auto_order_attempts or 0) < max_attempts
            and (include_flagged or not order.is_flagged_for_review)
        ]

    def find_tracking_candidates(self, store_id: str | None = None, limit: int = 500) -> list[Order]:
        """Orders with a supplier order whose parcel may still be moving."""
        statuses = [OrderStatus.PROCESSING.value, OrderStatus.SHIPPED.value]
        items = self._scoped(store_id, status__in=statuses).limit(limit).all().items
        return [order for order in items if order.supplier_order_id]

    def count_recent_for_customers(
        self,
        store_id: str | None,
        customer_ids: list[str],
        since: datetime,
        exclude_order_id: str,
        limit: int = 1000,
    ) -> int:
        """Other orders in the store by any of ``customer_ids`` created at or after ``since``."""
        if not customer_ids:
            return 0
        items = (
            self._scoped(store_id, customer_id__in=customer_ids, created_at__gte=since)
            .limit(limit)
            .all()
            .items
        )
        return sum(1 for order in items if str(order.id) != str(exclude_order_id))

    def claim_for_dispatch(self, order: Order, token: str, claimed_at: datetime) -> bool:
        """Take the dispatch claim on a loaded order.

        The write goes through the aggregate version check: if another worker
        saved the order after ``order`` was loaded, the claim is rejected and
        nothing is written. Two workers racing for the same order therefore
        cannot both win.
        """
        order.claim_dispatch(token, claimed_at)
        try:
            with UnitOfWork():
                self.add(order)
        except ExpectedVersionError:
            return False
        return True
