"""Dropshipping bounded context — Supplier Order Fulfillment.

Sends paid orders to dropshipping suppliers, follows each supplier order
through its lifecycle by polling, maps supplier tracking onto the
customer-facing order status and keeps an audit trail of every supplier
status transition. Uses CQRS: suppliers own the shipment state, we keep a
local mirror of it on the Order aggregate.
"""

from protean.domain import Domain

from dropshipping.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

dropshipping = Domain(name="dropshipping")
