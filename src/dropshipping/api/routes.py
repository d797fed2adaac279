"""FastAPI routes for the Dropshipping domain."""

import json

from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from dropshipping.api.dependencies import (
    get_config,
    get_dispatcher,
    get_payment_processor,
    get_poller,
    get_tracking_updater,
    require_internal_token,
)
from dropshipping.api.schemas import (
    BatchResponse,
    DispatchResponse,
    OrderIdResponse,
    PaymentConfirmedResponse,
    PlaceOrderRequest,
    RiskResponse,
    StatusResponse,
    StoreScopeRequest,
    TimelineEntryResponse,
    TrackingEventsResponse,
    TrackingResponse,
)
from dropshipping.config import DropshippingConfig
from dropshipping.exceptions import OrderNotFoundError, SupplierError
from dropshipping.order.placement import PlaceOrder
from dropshipping.pipeline import jobs
from dropshipping.pipeline.dispatch import OrderDispatcher
from dropshipping.pipeline.payment import PaymentProcessor
from dropshipping.pipeline.polling import SupplierStatusPoller
from dropshipping.pipeline.results import DispatchResult
from dropshipping.pipeline.tracking import TrackingUpdater
from dropshipping.risk.scoring import RiskScorer
from dropshipping.supplier_event.timeline import build_timeline
from dropshipping.utils.logging import bind_order_context


def _dispatch_response(result: DispatchResult) -> DispatchResponse:
    return DispatchResponse(
        order_id=result.order_id,
        outcome=result.outcome.value,
        supplier_order_id=result.supplier_order_id,
        error=result.error,
        reason=result.reason,
    )


# ---------------------------------------------------------------------------
# Orders Router
# ---------------------------------------------------------------------------
orders_router = APIRouter(prefix="/orders", tags=["orders"])


@orders_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    """Record an order handed over by checkout."""
    try:
        command = PlaceOrder(
            store_id=body.store_id,
            customer_id=body.customer_id,
            items=json.dumps([item.model_dump() for item in body.items]),
            shipping_address=json.dumps(body.shipping_address) if body.shipping_address is not None else None,
            total=body.total,
        )
        result = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.messages) from None
    return OrderIdResponse(order_id=result)


@orders_router.post("/{order_id}/send-to-supplier", response_model=DispatchResponse)
async def send_to_supplier(
    order_id: str,
    dispatcher: OrderDispatcher = Depends(get_dispatcher),
) -> DispatchResponse:
    """Manually send an order to its supplier (admin action)."""
    bind_order_context(order_id)
    result = dispatcher.dispatch(order_id)
    if result.reason == "order_not_found":
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return _dispatch_response(result)


@orders_router.post("/{order_id}/tracking", response_model=TrackingResponse)
async def update_tracking(
    order_id: str,
    updater: TrackingUpdater = Depends(get_tracking_updater),
) -> TrackingResponse:
    """Fetch the latest tracking from the supplier and apply it to the order."""
    bind_order_context(order_id)
    try:
        order = updater.update_tracking(order_id)
    except SupplierError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from None
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found or not sent to a supplier")
    return TrackingResponse(
        order_id=str(order.id),
        status=order.status,
        supplier_order_status=order.supplier_order_status,
        tracking_number=order.tracking_number,
        tracking_url=order.tracking_url,
    )


@orders_router.get("/{order_id}/tracking-events", response_model=TrackingEventsResponse)
async def tracking_events(order_id: str) -> TrackingEventsResponse:
    """Chronological timeline of an order, supplier events included."""
    try:
        entries = build_timeline(order_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return TrackingEventsResponse(
        order_id=order_id,
        events=[TimelineEntryResponse(**entry.to_dict()) for entry in entries],
    )


@orders_router.get("/{order_id}/risk", response_model=RiskResponse)
async def order_risk(order_id: str) -> RiskResponse:
    """Evaluate the order's risk score without changing the order."""
    try:
        result = RiskScorer().evaluate_order_risk(order_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return RiskResponse(risk_score=result.risk_score, flags=result.flags, is_flagged=result.is_flagged)


@orders_router.post("/{order_id}/payment/confirm", response_model=PaymentConfirmedResponse)
async def confirm_payment(
    order_id: str,
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> PaymentConfirmedResponse:
    """Payment provider reported success: score the order and send it on."""
    bind_order_context(order_id)
    try:
        outcome = processor.confirm_payment(order_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return PaymentConfirmedResponse(
        order_id=outcome.order_id,
        risk=RiskResponse(
            risk_score=outcome.risk.risk_score,
            flags=outcome.risk.flags,
            is_flagged=outcome.risk.is_flagged,
        ),
        dispatched=outcome.dispatched,
        dispatch=_dispatch_response(outcome.dispatch) if outcome.dispatch else None,
    )


@orders_router.post("/{order_id}/payment/fail", response_model=StatusResponse)
async def fail_payment(
    order_id: str,
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> StatusResponse:
    """Payment provider reported failure: cancel the order."""
    bind_order_context(order_id)
    try:
        processor.fail_payment(order_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return StatusResponse(status="payment_failed")


# ---------------------------------------------------------------------------
# Internal (scheduler) Router
# ---------------------------------------------------------------------------
internal_router = APIRouter(
    prefix="/internal",
    tags=["internal"],
    dependencies=[Depends(require_internal_token)],
)


@internal_router.post("/poll-supplier-status", response_model=BatchResponse)
async def poll_supplier_status(
    body: StoreScopeRequest | None = None,
    poller: SupplierStatusPoller = Depends(get_poller),
) -> BatchResponse:
    """Ask suppliers for the status of every in-flight supplier order."""
    result = poller.poll(store_id=body.store_id if body else None)
    return BatchResponse(**result.to_dict())


@internal_router.post("/retry-failed-dispatches", response_model=BatchResponse)
async def retry_failed_dispatches(
    body: StoreScopeRequest | None = None,
    dispatcher: OrderDispatcher = Depends(get_dispatcher),
    config: DropshippingConfig = Depends(get_config),
) -> BatchResponse:
    """Send again paid orders that never reached their supplier."""
    result = jobs.retry_failed_dispatches(
        dispatcher,
        max_attempts=config.max_auto_order_attempts,
        store_id=body.store_id if body else None,
        limit=config.poll_batch_size,
        send_anyway_on_high_risk=config.send_anyway_on_high_risk,
    )
    return BatchResponse(**result.to_dict())


@internal_router.post("/sync-tracking", response_model=BatchResponse)
async def sync_tracking(
    body: StoreScopeRequest | None = None,
    updater: TrackingUpdater = Depends(get_tracking_updater),
    config: DropshippingConfig = Depends(get_config),
) -> BatchResponse:
    """Refresh tracking for every order still on its way."""
    result = jobs.sync_tracking(updater, store_id=body.store_id if body else None, limit=config.poll_batch_size)
    return BatchResponse(**result.to_dict())
