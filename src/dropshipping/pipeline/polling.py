"""Supplier status polling — ask suppliers where their orders are.

Invoked by a scheduled job. Candidates are processed one at a time; a
failure on one order is recorded in the result and the batch moves on.
"""

import structlog
from protean.utils.globals import current_domain

from dropshipping.exceptions import UnrecognisedSupplierStatusError
from dropshipping.order.order import Order
from dropshipping.pipeline.results import BatchResult, Outcome
from dropshipping.pipeline.sourcing import supplier_name_for
from dropshipping.supplier.registry import SupplierRegistry
from dropshipping.supplier.status import map_supplier_status
from dropshipping.supplier_event.log import SupplierEventLog

logger = structlog.get_logger(__name__)


class SupplierStatusPoller:
    def __init__(
        self,
        suppliers: SupplierRegistry,
        event_log: SupplierEventLog | None = None,
        batch_size: int = 500,
    ):
        self.suppliers = suppliers
        self.event_log = event_log or SupplierEventLog()
        self.batch_size = batch_size

    def poll(self, store_id: str | None = None) -> BatchResult:
        repo = current_domain.repository_for(Order)
        candidates = repo.find_awaiting_supplier(store_id=store_id, limit=self.batch_size)

        result = BatchResult()
        for order in candidates:
            try:
                changed = self._poll_order(repo, order)
            except Exception as exc:
                logger.error(
                    "Supplier status poll failed for order",
                    order_id=str(order.id),
                    supplier_order_id=order.supplier_order_id,
                    error=str(exc),
                )
                result.record(str(order.id), Outcome.FAILED, error=str(exc))
                continue
            result.record(str(order.id), Outcome.UPDATED if changed else Outcome.UNCHANGED)

        logger.info(
            "Supplier statuses polled",
            store_id=store_id,
            processed=result.processed,
            updated=result.updated,
            failed=len(result.failures),
        )
        return result

    def _poll_order(self, repo, order: Order) -> bool:
        _, adapter = self.suppliers.resolve(supplier_name_for(order))
        response = adapter.get_order_status(order.supplier_order_id)

        new_status = map_supplier_status(response.get("status"))
        if new_status is None:
            raise UnrecognisedSupplierStatusError(response.get("status"))

        previous = order.previous_supplier_status
        if not order.apply_supplier_status(
            new_status,
            tracking_number=response.get("tracking_number"),
            tracking_url=response.get("tracking_url"),
        ):
            return False

        repo.add(order)
        self.event_log.log_event(
            order_id=str(order.id),
            old_status=previous,
            new_status=new_status,
            details={"supplier_order_id": order.supplier_order_id},
        )
        return True
