"""Request-scoped access to the fulfillment services.

Configuration and the supplier registry are created once at application
startup and kept on ``app.state``; services are assembled per request.
"""

from fastapi import Header, HTTPException, Request

from dropshipping.config import DropshippingConfig
from dropshipping.pipeline.dispatch import OrderDispatcher
from dropshipping.pipeline.payment import PaymentProcessor
from dropshipping.pipeline.polling import SupplierStatusPoller
from dropshipping.pipeline.tracking import TrackingUpdater
from dropshipping.risk.scoring import RiskScorer
from dropshipping.supplier.registry import SupplierRegistry


def get_config(request: Request) -> DropshippingConfig:
    config = getattr(request.app.state, "dropshipping_config", None)
    if config is None:
        config = DropshippingConfig.from_env()
        request.app.state.dropshipping_config = config
    return config


def get_suppliers(request: Request) -> SupplierRegistry:
    suppliers = getattr(request.app.state, "suppliers", None)
    if suppliers is None:
        suppliers = SupplierRegistry.from_config(get_config(request))
        request.app.state.suppliers = suppliers
    return suppliers


def get_dispatcher(request: Request) -> OrderDispatcher:
    return OrderDispatcher(get_suppliers(request), claim_timeout=get_config(request).dispatch_claim_timeout)


def get_poller(request: Request) -> SupplierStatusPoller:
    return SupplierStatusPoller(get_suppliers(request), batch_size=get_config(request).poll_batch_size)


def get_tracking_updater(request: Request) -> TrackingUpdater:
    return TrackingUpdater(get_suppliers(request))


def get_payment_processor(request: Request) -> PaymentProcessor:
    return PaymentProcessor(
        get_dispatcher(request),
        RiskScorer(),
        send_anyway_on_high_risk=get_config(request).send_anyway_on_high_risk,
    )


def require_internal_token(request: Request, x_internal_token: str = Header(default="")) -> None:
    """Guard for the scheduler-only endpoints."""
    expected = get_config(request).internal_cron_token
    if not expected or x_internal_token != expected:
        raise HTTPException(status_code=401, detail="Invalid internal token")
