"""HTTP supplier adapter — talks to a supplier's JSON order API.

Endpoints used:
    POST {base_url}/orders                      → {"supplier_order_id": ..., "status": ...}
    GET  {base_url}/orders/{id}                 → {"status": ..., "tracking_number": ...}
    GET  {base_url}/orders/{id}/tracking        → {"status": ..., "tracking_number": ...}
"""

import requests
import structlog

from dropshipping.exceptions import SupplierRequestError
from dropshipping.supplier.normalized import NormalizedOrder
from dropshipping.supplier.port import SupplierPort

logger = structlog.get_logger(__name__)


def _pick(payload: dict, *keys: str):
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


class HttpSupplier(SupplierPort):
    def __init__(
        self,
        supplier: str,
        base_url: str | None,
        api_key: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.supplier = supplier
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def is_configured(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "X-Supplier": self.supplier}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(self, method: str, path: str, **kwargs) -> dict:
        if not self.is_configured():
            raise SupplierRequestError(f"Supplier API for {self.supplier} is not configured")

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            logger.warning("Supplier API request failed", supplier=self.supplier, url=url, error=str(exc))
            raise SupplierRequestError(f"{self.supplier} API request failed: {exc}") from exc
        except ValueError as exc:
            raise SupplierRequestError(f"{self.supplier} API returned invalid JSON") from exc

    @staticmethod
    def _status_payload(supplier_order_id: str, payload: dict) -> dict:
        return {
            "supplier_order_id": supplier_order_id,
            "status": _pick(payload, "status"),
            "tracking_number": _pick(payload, "tracking_number", "trackingNumber"),
            "tracking_url": _pick(payload, "tracking_url", "trackingUrl"),
        }

    def create_order(self, order: NormalizedOrder) -> dict:
        payload = self._request("POST", "/orders", json=order.to_dict())
        supplier_order_id = _pick(payload, "supplier_order_id", "supplierOrderId", "id")
        if not supplier_order_id:
            raise SupplierRequestError(f"{self.supplier} API did not return a supplier order id")
        return {
            "supplier_order_id": str(supplier_order_id),
            "status": _pick(payload, "status") or "pending",
        }

    def get_order_status(self, supplier_order_id: str) -> dict:
        payload = self._request("GET", f"/orders/{supplier_order_id}")
        return self._status_payload(supplier_order_id, payload)

    def get_tracking(self, supplier_order_id: str) -> dict:
        payload = self._request("GET", f"/orders/{supplier_order_id}/tracking")
        return self._status_payload(supplier_order_id, payload)
