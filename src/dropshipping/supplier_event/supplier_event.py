"""SupplierOrderEvent aggregate — append-only audit trail of supplier status changes.

One record per transition of an order's supplier status, with whatever
context explains it (supplier order id, error message). Records are never
updated or deleted.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from dropshipping.domain import dropshipping
from dropshipping.order.order import SupplierOrderStatus


@dropshipping.aggregate
class SupplierOrderEvent:
    order_id = Identifier(required=True)
    old_status = String(choices=SupplierOrderStatus)
    new_status = String(required=True, choices=SupplierOrderStatus)
    details = Text()  # JSON object
    created_at = DateTime(required=True)

    @classmethod
    def record(
        cls,
        order_id: str,
        old_status: SupplierOrderStatus | None,
        new_status: SupplierOrderStatus,
        details: dict | None = None,
    ):
        return cls(
            order_id=order_id,
            old_status=old_status.value if old_status else None,
            new_status=new_status.value,
            details=json.dumps(details or {}),
            created_at=datetime.now(UTC),
        )

    @property
    def details_dict(self) -> dict:
        return json.loads(self.details) if self.details else {}
