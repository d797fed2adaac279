"""Order domain events — immutable facts about dropship order state changes.

All events are past tense and versioned so downstream consumers (email,
analytics, admin dashboards) can react without reading the aggregate.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from dropshipping.domain import dropshipping


@dropshipping.event(part_of="Order")
class OrderPlaced:
    """An order was placed at checkout."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    store_id = String()
    customer_id = String()
    items = Text(required=True)  # JSON list of item dicts
    total = Float(required=True)
    placed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class PaymentConfirmed:
    __version__ = "v1"

    order_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class PaymentFailed:
    __version__ = "v1"

    order_id = Identifier(required=True)
    failed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class RiskAssessed:
    """The order was scored by the risk heuristics."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    risk_score = Integer(required=True)
    is_flagged = Boolean(required=True)
    assessed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class SentToSupplier:
    """The supplier accepted the order submission."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    supplier_order_id = String(required=True)
    attempt = Integer(required=True)
    sent_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class SupplierDispatchFailed:
    """Submitting the order to the supplier failed; it is back to PENDING."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    error = String(required=True, max_length=1000)
    attempt = Integer(required=True)
    failed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class SupplierStatusChanged:
    """The supplier reported a new status for its order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    supplier_order_id = String()
    old_status = String()
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@dropshipping.event(part_of="Order")
class TrackingUpdated:
    """Tracking details and the customer-facing status were refreshed."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    status = String(required=True)
    tracking_number = String()
    tracking_url = String(max_length=1000)
    updated_at = DateTime(required=True)
