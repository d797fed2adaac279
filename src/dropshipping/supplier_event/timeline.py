"""Order timeline — the customer-facing history of an order.

Merges what the order itself tells us (creation, payment, tracking number,
delivery) with the supplier event trail into one chronological list.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.exceptions import OrderNotFoundError
from dropshipping.order.order import Order, OrderStatus, PaymentStatus, SupplierOrderStatus
from dropshipping.supplier_event.log import SupplierEventLog


class TimelineEntryType(Enum):
    ORDER_CREATED = "ORDER_CREATED"
    PAYMENT_CONFIRMED = "PAYMENT_CONFIRMED"
    SUPPLIER_EVENT = "SUPPLIER_EVENT"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class TimelineEntry:
    type: TimelineEntryType
    timestamp: datetime
    label: str
    description: str | None = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "label": self.label,
            "description": self.description,
        }


# Supplier statuses that also deserve a milestone of their own
_MILESTONES = {
    SupplierOrderStatus.SHIPPED.value: (TimelineEntryType.SHIPPED, "Shipped by supplier"),
    SupplierOrderStatus.DELIVERED.value: (TimelineEntryType.DELIVERED, "Delivered"),
    SupplierOrderStatus.CANCELLED.value: (TimelineEntryType.CANCELLED, "Cancelled by supplier"),
}


def build_timeline(order_id: str, event_log: SupplierEventLog | None = None) -> list[TimelineEntry]:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFoundError(order_id) from None

    event_log = event_log or SupplierEventLog()
    last_touched = order.updated_at or order.created_at

    entries = [TimelineEntry(TimelineEntryType.ORDER_CREATED, order.created_at, "Order created")]

    if order.payment_status == PaymentStatus.PAID.value:
        entries.append(TimelineEntry(TimelineEntryType.PAYMENT_CONFIRMED, last_touched, "Payment confirmed"))

    for event in event_log.events_for(order_id):
        entries.append(
            TimelineEntry(
                TimelineEntryType.SUPPLIER_EVENT,
                event.created_at,
                event.new_status,
                f"From {event.old_status}" if event.old_status else None,
            )
        )
        if event.new_status in _MILESTONES:
            entry_type, label = _MILESTONES[event.new_status]
            entries.append(TimelineEntry(entry_type, event.created_at, label))

    if order.tracking_number:
        entries.append(
            TimelineEntry(
                TimelineEntryType.SHIPPED,
                last_touched,
                "Shipped (tracking number added)",
                order.tracking_number,
            )
        )

    if order.status == OrderStatus.DELIVERED.value:
        entries.append(TimelineEntry(TimelineEntryType.DELIVERED, last_touched, "Delivered"))

    # Stable sort keeps insertion order for entries sharing a timestamp
    return sorted(entries, key=lambda entry: entry.timestamp)
