"""Email supplier adapter — places orders by emailing the supplier's order desk.

Suppliers without an API receive a plain-text order email. They report
progress out of band, so status and tracking queries answer from what we
know locally: the order is pending until someone records otherwise.
"""

from dropshipping.exceptions import SupplierRequestError
from dropshipping.mail.port import EmailPort
from dropshipping.mail.templates import SupplierOrderTemplate
from dropshipping.supplier.normalized import NormalizedOrder
from dropshipping.supplier.port import SupplierPort


class EmailSupplier(SupplierPort):
    def __init__(self, supplier: str, mailer: EmailPort, order_email: str | None):
        self.supplier = supplier
        self.mailer = mailer
        self.order_email = order_email

    def is_configured(self) -> bool:
        return bool(self.order_email)

    def create_order(self, order: NormalizedOrder) -> dict:
        if not self.is_configured():
            raise SupplierRequestError(f"No order email configured for {self.supplier}")

        message = SupplierOrderTemplate.render(order)
        result = self.mailer.send(to=self.order_email, subject=message["subject"], body=message["body"])
        if result.get("status") != "sent":
            raise SupplierRequestError(result.get("error") or "Could not email supplier")

        return {"supplier_order_id": f"EMAIL-{order.order_id}", "status": "pending"}

    def get_order_status(self, supplier_order_id: str) -> dict:
        return {"supplier_order_id": supplier_order_id, "status": "pending"}

    def get_tracking(self, supplier_order_id: str) -> dict:
        return {"supplier_order_id": supplier_order_id, "status": "pending"}
