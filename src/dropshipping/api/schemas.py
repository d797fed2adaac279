"""Pydantic API schemas for the Dropshipping domain.

These are the external API contracts, kept separate from domain objects.
The API layer translates between these schemas and the pipeline services.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: str
    variant_id: str | None = None
    name: str | None = None
    variant_name: str | None = None
    quantity: int = Field(ge=1)
    unit_price: float = 0.0


class PlaceOrderRequest(BaseModel):
    store_id: str | None = None
    customer_id: str | None = None
    items: list[OrderItemRequest]
    shipping_address: dict | None = None
    total: float = Field(ge=0.0)


class StoreScopeRequest(BaseModel):
    store_id: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class DispatchResponse(BaseModel):
    order_id: str
    outcome: str
    supplier_order_id: str | None = None
    error: str | None = None
    reason: str | None = None


class TrackingResponse(BaseModel):
    order_id: str
    status: str
    supplier_order_status: str | None = None
    tracking_number: str | None = None
    tracking_url: str | None = None


class TimelineEntryResponse(BaseModel):
    type: str
    timestamp: str
    label: str
    description: str | None = None


class TrackingEventsResponse(BaseModel):
    order_id: str
    events: list[TimelineEntryResponse]


class RiskResponse(BaseModel):
    risk_score: int
    flags: list[str]
    is_flagged: bool


class PaymentConfirmedResponse(BaseModel):
    order_id: str
    risk: RiskResponse
    dispatched: bool
    dispatch: DispatchResponse | None = None


class StatusResponse(BaseModel):
    status: str


class BatchResponse(BaseModel):
    processed: int
    updated: int
    failed: int
