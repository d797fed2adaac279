"""Carry supplier tracking over to the customer-facing order."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.order.order import TERMINAL_SUPPLIER_STATUSES, Order, SupplierOrderStatus
from dropshipping.pipeline.sourcing import supplier_name_for
from dropshipping.supplier.registry import SupplierRegistry
from dropshipping.supplier.status import map_supplier_status
from dropshipping.supplier_event.log import SupplierEventLog

logger = structlog.get_logger(__name__)

_PROGRESSION = [
    SupplierOrderStatus.PENDING,
    SupplierOrderStatus.SENT_TO_SUPPLIER,
    SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    SupplierOrderStatus.SHIPPED,
    SupplierOrderStatus.DELIVERED,
]


def _advances(current: SupplierOrderStatus, new: SupplierOrderStatus) -> bool:
    if current in TERMINAL_SUPPLIER_STATUSES:
        return False
    if new == SupplierOrderStatus.CANCELLED:
        return True
    return _PROGRESSION.index(new) > _PROGRESSION.index(current)


class TrackingUpdater:
    def __init__(self, suppliers: SupplierRegistry, event_log: SupplierEventLog | None = None):
        self.suppliers = suppliers
        self.event_log = event_log or SupplierEventLog()

    def update_tracking(self, order_id: str) -> Order | None:
        """Refresh tracking for an order; None when there is nothing to track.

        Supplier errors propagate to the caller.
        """
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(order_id)
        except ObjectNotFoundError:
            return None

        if not order.supplier_order_id:
            return None

        _, adapter = self.suppliers.resolve(supplier_name_for(order))
        tracking = adapter.get_tracking(order.supplier_order_id)

        previous = order.previous_supplier_status
        order.apply_tracking(
            tracking.get("status"),
            tracking_number=tracking.get("tracking_number"),
            tracking_url=tracking.get("tracking_url"),
        )

        # Tracking may move the supplier status forward, never back
        supplier_status = map_supplier_status(tracking.get("status"))
        status_changed = False
        if supplier_status is not None and _advances(previous, supplier_status):
            status_changed = order.apply_supplier_status(supplier_status)

        repo.add(order)
        if status_changed:
            self.event_log.log_event(
                order_id=str(order.id),
                old_status=previous,
                new_status=supplier_status,
                details={"supplier_order_id": order.supplier_order_id, "source": "tracking"},
            )

        logger.info(
            "Order tracking updated",
            order_id=str(order.id),
            status=order.status,
            tracking_number=order.tracking_number,
        )
        return order
