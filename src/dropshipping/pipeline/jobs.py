"""Scheduled fulfillment jobs.

Both jobs work through a bounded batch of candidates one order at a time
and report per-order outcomes. The scheduler that calls them lives outside
this package.
"""

import structlog
from protean.utils.globals import current_domain

from dropshipping.order.order import Order
from dropshipping.pipeline.dispatch import OrderDispatcher
from dropshipping.pipeline.results import BatchResult, Outcome
from dropshipping.pipeline.tracking import TrackingUpdater

logger = structlog.get_logger(__name__)


def retry_failed_dispatches(
    dispatcher: OrderDispatcher,
    max_attempts: int = 3,
    store_id: str | None = None,
    limit: int = 500,
    send_anyway_on_high_risk: bool = False,
) -> BatchResult:
    """Send again every paid order that has not reached a supplier yet.

    Orders held for risk review are left alone unless
    ``send_anyway_on_high_risk`` is set.
    """
    candidates = current_domain.repository_for(Order).find_retry_candidates(
        max_attempts,
        store_id=store_id,
        limit=limit,
        include_flagged=send_anyway_on_high_risk,
    )

    result = BatchResult()
    for order in candidates:
        order_id = str(order.id)
        try:
            dispatch = dispatcher.dispatch(order_id)
        except Exception as exc:
            logger.error("Dispatch retry failed for order", order_id=order_id, error=str(exc))
            result.record(order_id, Outcome.FAILED, error=str(exc))
            continue
        result.record(dispatch.order_id, dispatch.outcome, error=dispatch.error)

    logger.info(
        "Failed dispatches retried",
        store_id=store_id,
        processed=result.processed,
        sent=result.updated,
        failed=len(result.failures),
    )
    return result


def sync_tracking(updater: TrackingUpdater, store_id: str | None = None, limit: int = 500) -> BatchResult:
    """Refresh tracking for every order whose parcel may still be moving."""
    candidates = current_domain.repository_for(Order).find_tracking_candidates(store_id=store_id, limit=limit)

    result = BatchResult()
    for order in candidates:
        order_id = str(order.id)
        try:
            updated = updater.update_tracking(order_id)
        except Exception as exc:
            logger.error("Tracking sync failed for order", order_id=order_id, error=str(exc))
            result.record(order_id, Outcome.FAILED, error=str(exc))
            continue
        result.record(order_id, Outcome.UPDATED if updated is not None else Outcome.SKIPPED)

    logger.info(
        "Tracking synced",
        store_id=store_id,
        processed=result.processed,
        updated=result.updated,
        failed=len(result.failures),
    )
    return result
