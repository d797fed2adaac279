"""Supplier registry — which adapter serves which named supplier.

A registry is built once from configuration and passed to the pipeline
services that need it. Lookups are explicit: a supplier name we do not
know is an error, never a silent fallback to some other adapter.
"""

from enum import Enum

import structlog

from dropshipping.config import DropshippingConfig, DropshippingMode, SupplierAdapterKind
from dropshipping.exceptions import UnknownSupplierError
from dropshipping.mail.log_adapter import LogEmailAdapter
from dropshipping.mail.port import EmailPort
from dropshipping.supplier.email_adapter import EmailSupplier
from dropshipping.supplier.fake_adapter import FakeSupplier
from dropshipping.supplier.http_adapter import HttpSupplier
from dropshipping.supplier.port import SupplierPort

logger = structlog.get_logger(__name__)


class SupplierName(Enum):
    ALIEXPRESS = "aliexpress"
    ALIBABA = "alibaba"
    EBAY = "ebay"
    TEMU = "temu"
    CJ = "cj"

    @classmethod
    def parse(cls, name: str | None) -> "SupplierName":
        normalized = (name or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownSupplierError(name) from None


class SupplierRegistry:
    def __init__(
        self,
        adapters: dict[SupplierName, SupplierPort],
        default: SupplierName | None = None,
    ):
        self._adapters = dict(adapters)
        self.default = default

    def adapter(self, name: SupplierName) -> SupplierPort:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownSupplierError(name.value) from None

    def resolve(self, supplier_name: str | None) -> tuple[SupplierName, SupplierPort]:
        """Adapter for a product's supplier name, or for the default when it has none."""
        if supplier_name:
            name = SupplierName.parse(supplier_name)
        elif self.default is not None:
            name = self.default
        else:
            raise UnknownSupplierError(None)
        return name, self.adapter(name)

    @classmethod
    def from_config(cls, config: DropshippingConfig, mailer: EmailPort | None = None) -> "SupplierRegistry":
        default = SupplierName.parse(config.default_supplier) if config.default_supplier else None

        adapters: dict[SupplierName, SupplierPort] = {}
        for name in SupplierName:
            if config.adapter == SupplierAdapterKind.FAKE:
                adapters[name] = FakeSupplier(prefix=name.value.upper())
            elif config.mode == DropshippingMode.API:
                adapters[name] = HttpSupplier(
                    supplier=name.value,
                    base_url=config.api_base_url,
                    api_key=config.api_key,
                    timeout=config.api_timeout,
                )
            else:
                adapters[name] = EmailSupplier(
                    supplier=name.value,
                    mailer=mailer or LogEmailAdapter(),
                    order_email=config.supplier_order_email,
                )

        logger.info(
            "Supplier registry configured",
            adapter=config.adapter.value,
            mode=config.mode.value,
            default_supplier=default.value if default else None,
        )
        return cls(adapters, default=default)
