"""Order aggregate (CQRS) — the local mirror of a dropshipped order.

Two independent lifecycles live on an order:

Fulfillment status (customer facing):
    processing → shipped → delivered
    {processing, shipped} → cancelled

Supplier order status (what the supplier told us):
    PENDING → SENT_TO_SUPPLIER → ACCEPTED_BY_SUPPLIER → SHIPPED → DELIVERED
    any non-terminal → CANCELLED
    any non-terminal → PENDING   (dispatch failure, awaiting retry)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from dropshipping.domain import dropshipping
from dropshipping.order.events import (
    OrderPlaced,
    PaymentConfirmed,
    PaymentFailed,
    RiskAssessed,
    SentToSupplier,
    SupplierDispatchFailed,
    SupplierStatusChanged,
    TrackingUpdated,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class SupplierOrderStatus(Enum):
    PENDING = "PENDING"
    SENT_TO_SUPPLIER = "SENT_TO_SUPPLIER"
    ACCEPTED_BY_SUPPLIER = "ACCEPTED_BY_SUPPLIER"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


TERMINAL_SUPPLIER_STATUSES = {
    SupplierOrderStatus.DELIVERED,
    SupplierOrderStatus.CANCELLED,
}

# Supplier states worth asking the supplier about again
AWAITING_SUPPLIER_STATUSES = [
    SupplierOrderStatus.SENT_TO_SUPPLIER,
    SupplierOrderStatus.ACCEPTED_BY_SUPPLIER,
    SupplierOrderStatus.SHIPPED,
]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@dropshipping.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    name = String(max_length=300)
    variant_name = String(max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(default=0.0, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@dropshipping.aggregate
class Order:
    store_id = String(max_length=100)
    customer_id = Identifier()
    items = HasMany(OrderItem)
    shipping_address = Text()  # raw JSON from checkout, may be malformed
    total = Float(default=0.0)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)

    # Supplier side
    supplier_order_id = String(max_length=255)
    supplier_order_status = String(choices=SupplierOrderStatus)
    tracking_number = String(max_length=255)
    tracking_url = String(max_length=1000)
    auto_order_attempts = Integer(default=0)
    auto_order_error = String(max_length=1000)

    # Double-send guard, see OrderRepository.claim_for_dispatch.
    # The claim write relies on the aggregate version check.
    dispatch_claim = String(max_length=64)
    dispatch_claimed_at = DateTime()

    # Risk
    risk_score = Integer()
    is_flagged_for_review = Boolean(default=False)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        store_id: str | None,
        customer_id: str | None,
        items_data: list[dict],
        shipping_address: str | dict | None = None,
        total: float = 0.0,
        payment_status: str = PaymentStatus.UNPAID.value,
        created_at: datetime | None = None,
    ):
        """Record an order placed at checkout."""
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = created_at or datetime.now(UTC)
        if isinstance(shipping_address, dict):
            shipping_address = json.dumps(shipping_address)

        order = cls(
            store_id=store_id,
            customer_id=customer_id,
            shipping_address=shipping_address,
            total=total,
            payment_status=payment_status,
            status=OrderStatus.PROCESSING.value,
            auto_order_attempts=0,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            order.add_items(OrderItem(**item_data))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                store_id=store_id or "",
                customer_id=str(customer_id) if customer_id else "",
                items=json.dumps(items_data),
                total=total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def confirm_payment(self) -> None:
        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now
        self.raise_(PaymentConfirmed(order_id=str(self.id), confirmed_at=now))

    def fail_payment(self) -> None:
        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.FAILED.value
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now
        self.raise_(PaymentFailed(order_id=str(self.id), failed_at=now))

    def record_risk(self, risk_score: int, is_flagged: bool) -> None:
        now = datetime.now(UTC)
        self.risk_score = risk_score
        self.is_flagged_for_review = is_flagged
        self.updated_at = now
        self.raise_(
            RiskAssessed(
                order_id=str(self.id),
                risk_score=risk_score,
                is_flagged=is_flagged,
                assessed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Supplier dispatch
    # -------------------------------------------------------------------
    @property
    def previous_supplier_status(self) -> SupplierOrderStatus:
        """Stored supplier status, PENDING when the order was never sent."""
        if self.supplier_order_status:
            return SupplierOrderStatus(self.supplier_order_status)
        return SupplierOrderStatus.PENDING

    def record_supplier_acceptance(self, supplier_order_id: str) -> None:
        """The supplier took the order and assigned it an id."""
        if self.supplier_order_id:
            raise ValidationError({"supplier_order_id": ["Order has already been sent to a supplier"]})

        now = datetime.now(UTC)
        self.supplier_order_id = supplier_order_id
        self.supplier_order_status = SupplierOrderStatus.SENT_TO_SUPPLIER.value
        self.auto_order_error = None
        self.auto_order_attempts = (self.auto_order_attempts or 0) + 1
        self.dispatch_claim = None
        self.dispatch_claimed_at = None
        self.updated_at = now
        self.raise_(
            SentToSupplier(
                order_id=str(self.id),
                supplier_order_id=supplier_order_id,
                attempt=self.auto_order_attempts,
                sent_at=now,
            )
        )

    def record_dispatch_failure(self, error: str) -> None:
        """Sending failed: fall back to PENDING so the retry job picks it up.

        Progress is reset even if the order had advanced further.
        """
        now = datetime.now(UTC)
        self.supplier_order_status = SupplierOrderStatus.PENDING.value
        self.auto_order_error = error
        self.auto_order_attempts = (self.auto_order_attempts or 0) + 1
        self.dispatch_claim = None
        self.dispatch_claimed_at = None
        self.updated_at = now
        self.raise_(
            SupplierDispatchFailed(
                order_id=str(self.id),
                error=error,
                attempt=self.auto_order_attempts,
                failed_at=now,
            )
        )

    def claim_dispatch(self, token: str, claimed_at: datetime) -> None:
        """Mark the order as being sent by the worker holding ``token``."""
        if self.supplier_order_id:
            raise ValidationError({"supplier_order_id": ["Order has already been sent to a supplier"]})

        self.dispatch_claim = token
        self.dispatch_claimed_at = claimed_at

    def release_dispatch_claim(self) -> None:
        self.dispatch_claim = None
        self.dispatch_claimed_at = None

    # -------------------------------------------------------------------
    # Supplier status & tracking
    # -------------------------------------------------------------------
    def apply_supplier_status(
        self,
        new_status: SupplierOrderStatus,
        tracking_number: str | None = None,
        tracking_url: str | None = None,
    ) -> bool:
        """Apply a status reported by the supplier.

        Returns False (and changes nothing) when the status is unchanged.
        Tracking details the supplier did not send are left as they are.
        """
        current = self.previous_supplier_status
        if new_status == current and self.supplier_order_status:
            return False
        if current in TERMINAL_SUPPLIER_STATUSES:
            raise ValidationError(
                {"supplier_order_status": [f"Cannot transition from {current.value} to {new_status.value}"]}
            )

        now = datetime.now(UTC)
        self.supplier_order_status = new_status.value
        self.tracking_number = tracking_number or self.tracking_number
        self.tracking_url = tracking_url or self.tracking_url
        self.updated_at = now
        self.raise_(
            SupplierStatusChanged(
                order_id=str(self.id),
                supplier_order_id=self.supplier_order_id,
                old_status=current.value,
                new_status=new_status.value,
                changed_at=now,
            )
        )
        return True

    def apply_tracking(
        self,
        tracking_status: str | None,
        tracking_number: str | None = None,
        tracking_url: str | None = None,
    ) -> None:
        """Map supplier tracking onto the customer-facing status.

        delivered wins over shipped; a processing order with tracking
        information is optimistically promoted to shipped.
        """
        normalized = (tracking_status or "").strip().lower()
        if normalized == "delivered":
            next_status = OrderStatus.DELIVERED.value
        elif normalized == "shipped":
            next_status = OrderStatus.SHIPPED.value
        elif self.status == OrderStatus.PROCESSING.value:
            next_status = OrderStatus.SHIPPED.value
        else:
            next_status = self.status

        now = datetime.now(UTC)
        self.status = next_status
        self.tracking_number = tracking_number or self.tracking_number
        self.tracking_url = tracking_url or self.tracking_url
        self.updated_at = now
        self.raise_(
            TrackingUpdated(
                order_id=str(self.id),
                status=next_status,
                tracking_number=self.tracking_number,
                tracking_url=self.tracking_url,
                updated_at=now,
            )
        )
