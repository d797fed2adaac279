"""Order dispatch — send a paid order to its supplier.

The dispatcher never raises on supplier trouble. Whatever happens, the
order is left in a state the retry job and the poller understand:

    success → SENT_TO_SUPPLIER with a supplier order id
    failure → PENDING with the error message, ready for another attempt

Each attempt, successful or not, bumps ``auto_order_attempts`` and writes
one SupplierOrderEvent.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.catalogue.customer import Customer
from dropshipping.exceptions import SupplierError
from dropshipping.order.address import parse_shipping_address
from dropshipping.order.order import Order, SupplierOrderStatus
from dropshipping.pipeline.results import DispatchResult, Outcome
from dropshipping.pipeline.sourcing import load_product, resolve_supplier_sku, supplier_name_for
from dropshipping.supplier.normalized import (
    NormalizedAddress,
    NormalizedCustomer,
    NormalizedItem,
    NormalizedOrder,
)
from dropshipping.supplier.registry import SupplierRegistry
from dropshipping.supplier_event.log import SupplierEventLog

logger = structlog.get_logger(__name__)


def _load_customer(customer_id: str | None) -> Customer | None:
    if not customer_id:
        return None
    try:
        return current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        return None


def build_normalized_order(order: Order) -> NormalizedOrder:
    """Assemble the supplier payload from the order, its products and its customer."""
    items = []
    for item in order.items or []:
        product = load_product(item.product_id)
        items.append(
            NormalizedItem(
                name=(product.name if product else None) or item.name or item.variant_name or "Product",
                quantity=item.quantity,
                supplier_sku=resolve_supplier_sku(item, product),
            )
        )

    address = parse_shipping_address(order.shipping_address)
    customer = _load_customer(order.customer_id)

    return NormalizedOrder(
        order_id=str(order.id),
        store_id=order.store_id,
        customer=NormalizedCustomer(
            name=address.get("name") or (customer.name if customer else None) or "Customer",
            email=customer.email if customer else None,
            phone=customer.phone if customer else None,
        ),
        shipping_address=NormalizedAddress.from_checkout(address),
        items=items,
    )


class OrderDispatcher:
    def __init__(
        self,
        suppliers: SupplierRegistry,
        event_log: SupplierEventLog | None = None,
        claim_timeout: int = 300,
    ):
        self.suppliers = suppliers
        self.event_log = event_log or SupplierEventLog()
        self.claim_timeout = timedelta(seconds=claim_timeout)

    def dispatch(self, order_id: str) -> DispatchResult:
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(order_id)
        except ObjectNotFoundError:
            logger.warning("Order not found for supplier dispatch", order_id=order_id)
            return DispatchResult(order_id=order_id, outcome=Outcome.SKIPPED, reason="order_not_found")

        if order.supplier_order_id:
            logger.info(
                "Order already sent to supplier, not sending again",
                order_id=order_id,
                supplier_order_id=order.supplier_order_id,
            )
            return DispatchResult(
                order_id=order_id,
                outcome=Outcome.SKIPPED,
                supplier_order_id=order.supplier_order_id,
                reason="already_sent",
            )

        try:
            claimed = self._claim(repo, order)
            if claimed:
                # Fresh copy, so later writes are checked against the claimed version
                order = repo.get(order_id)
        except Exception as exc:
            logger.error(
                "Could not claim order for supplier dispatch",
                order_id=order_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return DispatchResult(order_id=order_id, outcome=Outcome.FAILED, error=str(exc) or "Could not claim order")

        if not claimed:
            logger.warning("Order is being dispatched by another worker", order_id=order_id)
            return DispatchResult(order_id=order_id, outcome=Outcome.SKIPPED, reason="dispatch_in_progress")

        previous = order.previous_supplier_status

        try:
            payload = build_normalized_order(order)
            supplier, adapter = self.suppliers.resolve(supplier_name_for(order))
            response = adapter.create_order(payload)
            supplier_order_id = response.get("supplier_order_id")
            if not supplier_order_id:
                raise SupplierError("Supplier did not return an order id")
        except Exception as exc:
            return self._record_failure(repo, order, previous, exc)

        order.record_supplier_acceptance(str(supplier_order_id))
        repo.add(order)
        self.event_log.log_event(
            order_id=order_id,
            old_status=previous,
            new_status=SupplierOrderStatus.SENT_TO_SUPPLIER,
            details={"supplier_order_id": str(supplier_order_id), "supplier": supplier.value},
        )
        logger.info(
            "Order sent to supplier",
            order_id=order_id,
            supplier=supplier.value,
            supplier_order_id=str(supplier_order_id),
        )
        return DispatchResult(order_id=order_id, outcome=Outcome.SENT, supplier_order_id=str(supplier_order_id))

    def _claim(self, repo, order: Order) -> bool:
        now = datetime.now(UTC)
        token = uuid4().hex
        if order.dispatch_claim is None:
            return repo.claim_for_dispatch(order, token, now)

        claimed_at = order.dispatch_claimed_at
        if claimed_at is not None and claimed_at.tzinfo is None:
            claimed_at = claimed_at.replace(tzinfo=UTC)
        if claimed_at is not None and now - claimed_at < self.claim_timeout:
            return False

        logger.warning(
            "Taking over stale dispatch claim",
            order_id=str(order.id),
            claimed_at=str(order.dispatch_claimed_at),
        )
        return repo.claim_for_dispatch(order, token, now)

    def _record_failure(self, repo, order: Order, previous: SupplierOrderStatus, exc: Exception) -> DispatchResult:
        error = str(exc) or "Could not send order to supplier"
        logger.error(
            "Failed to send order to supplier",
            order_id=str(order.id),
            error=error,
            error_type=type(exc).__name__,
        )
        order.record_dispatch_failure(error)
        repo.add(order)
        self.event_log.log_event(
            order_id=str(order.id),
            old_status=previous,
            new_status=SupplierOrderStatus.PENDING,
            details={"error": error},
        )
        return DispatchResult(order_id=str(order.id), outcome=Outcome.FAILED, error=error)
