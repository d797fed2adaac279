"""Best-effort writer and reader for SupplierOrderEvent.

Audit writes never block the operation that triggered them: a failed
insert is logged and reported through the return value, not raised.
"""

import structlog
from protean.utils.globals import current_domain

from dropshipping.order.order import SupplierOrderStatus
from dropshipping.supplier_event.supplier_event import SupplierOrderEvent

logger = structlog.get_logger(__name__)


class SupplierEventLog:
    def log_event(
        self,
        order_id: str,
        old_status: SupplierOrderStatus | None,
        new_status: SupplierOrderStatus,
        details: dict | None = None,
    ) -> bool:
        """Append one transition record. Returns False when the write failed."""
        try:
            event = SupplierOrderEvent.record(
                order_id=str(order_id),
                old_status=old_status,
                new_status=new_status,
                details=details,
            )
            current_domain.repository_for(SupplierOrderEvent).add(event)
        except Exception as exc:
            logger.error(
                "Failed to log supplier event",
                order_id=str(order_id),
                new_status=new_status.value,
                error=str(exc),
            )
            return False
        return True

    def events_for(self, order_id: str) -> list[SupplierOrderEvent]:
        """All events of an order, oldest first."""
        repo = current_domain.repository_for(SupplierOrderEvent)
        events = repo._dao.query.filter(order_id=str(order_id)).limit(1000).all().items
        return sorted(events, key=lambda e: e.created_at)
