"""Runtime configuration for supplier integration and the fulfillment jobs.

Values come from environment variables so that the same build can run
against fake suppliers locally and real suppliers in production. A config
object is read once (per process, or per test) and handed to whoever needs
it; nothing here caches state at module level.
"""

import os
from dataclasses import dataclass
from enum import Enum


class DropshippingMode(Enum):
    EMAIL = "email"
    API = "api"


class SupplierAdapterKind(Enum):
    FAKE = "fake"
    LIVE = "live"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def _env_str(name: str) -> str | None:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class DropshippingConfig:
    mode: DropshippingMode = DropshippingMode.EMAIL
    adapter: SupplierAdapterKind = SupplierAdapterKind.FAKE
    default_supplier: str | None = None
    supplier_order_email: str | None = None
    api_base_url: str | None = None
    api_key: str | None = None
    api_timeout: float = 10.0
    send_anyway_on_high_risk: bool = False
    max_auto_order_attempts: int = 3
    dispatch_claim_timeout: int = 300
    poll_batch_size: int = 500
    internal_cron_token: str | None = None

    @classmethod
    def from_env(cls) -> "DropshippingConfig":
        """Build the configuration from the process environment."""
        mode = (_env_str("DROPSHIPPING_MODE") or "email").lower()
        adapter = (_env_str("SUPPLIER_ADAPTER") or "fake").lower()
        supplier = _env_str("DROPSHIPPING_SUPPLIER")

        return cls(
            mode=DropshippingMode.API if mode == "api" else DropshippingMode.EMAIL,
            adapter=SupplierAdapterKind(adapter),
            default_supplier=supplier.lower() if supplier else None,
            supplier_order_email=_env_str("DROPSHIPPING_SUPPLIER_EMAIL"),
            api_base_url=_env_str("DROPSHIPPING_API_BASE_URL"),
            api_key=_env_str("DROPSHIPPING_API_KEY"),
            api_timeout=float(_env_str("DROPSHIPPING_API_TIMEOUT") or 10.0),
            send_anyway_on_high_risk=_env_bool("SEND_ANYWAY_ON_HIGH_RISK"),
            max_auto_order_attempts=_env_int("MAX_AUTO_ORDER_ATTEMPTS", 3),
            dispatch_claim_timeout=_env_int("DISPATCH_CLAIM_TIMEOUT", 300),
            poll_batch_size=_env_int("POLL_BATCH_SIZE", 500),
            internal_cron_token=_env_str("INTERNAL_CRON_TOKEN"),
        )
