"""Translation of supplier-reported statuses onto SupplierOrderStatus."""

from dropshipping.order.order import SupplierOrderStatus

_SUPPLIER_STATUS_MAP = {
    # The supplier holds the order but has not acted on it yet
    "pending": SupplierOrderStatus.SENT_TO_SUPPLIER,
    "sent": SupplierOrderStatus.SENT_TO_SUPPLIER,
    "sent_to_supplier": SupplierOrderStatus.SENT_TO_SUPPLIER,
    "confirmed": SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    "accepted": SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    "accepted_by_supplier": SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    "processing": SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    "shipped": SupplierOrderStatus.SHIPPED,
    "in_transit": SupplierOrderStatus.SHIPPED,
    "delivered": SupplierOrderStatus.DELIVERED,
    "cancelled": SupplierOrderStatus.CANCELLED,
    "canceled": SupplierOrderStatus.CANCELLED,
}


def map_supplier_status(raw: str | None) -> SupplierOrderStatus | None:
    """Map a supplier status string, case-insensitively; None when it means nothing to us."""
    if not raw:
        return None
    return _SUPPLIER_STATUS_MAP.get(raw.strip().lower())
