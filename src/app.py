"""Dropshipping fulfillment FastAPI application.

Web server for the supplier pipeline: admin actions, payment callbacks and
the internal endpoints the scheduler hits. Every request runs inside the
dropshipping domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dropshipping.api import internal_router, orders_router
from dropshipping.config import DropshippingConfig
from dropshipping.domain import dropshipping
from dropshipping.supplier.registry import SupplierRegistry
from dropshipping.utils.logging import clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
dropshipping.init()

_DOMAIN_PREFIXES = ("/orders", "/internal")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Dropshipping Fulfillment API",
    description="Supplier dispatch, status polling, tracking and risk review",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Built once per process and shared by every request
app.state.dropshipping_config = DropshippingConfig.from_env()
app.state.suppliers = SupplierRegistry.from_config(app.state.dropshipping_config)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the dropshipping domain context for pipeline routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        try:
            with dropshipping.domain_context():
                return await call_next(request)
        finally:
            clear_context()
    # Health check, docs etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(orders_router)
app.include_router(internal_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    config = app.state.dropshipping_config
    return JSONResponse(
        content={
            "status": "ok",
            "domain": dropshipping.name,
            "supplier_mode": config.mode.value,
            "supplier_adapter": config.adapter.value,
        }
    )
