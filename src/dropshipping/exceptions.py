"""Errors raised by the fulfillment pipeline and its supplier adapters."""


class OrderNotFoundError(Exception):
    """The referenced order does not exist."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class SupplierError(Exception):
    """Base class for anything that goes wrong talking to a supplier."""


class UnknownSupplierError(SupplierError):
    """No adapter is registered for the requested supplier name."""

    def __init__(self, name: str | None):
        self.name = name
        if name:
            message = f"Unsupported supplier: {name}"
        else:
            message = "Supplier not configured"
        super().__init__(message)


class SupplierRequestError(SupplierError):
    """The supplier rejected or failed a request."""


class UnrecognisedSupplierStatusError(SupplierError):
    """The supplier reported a status we cannot map onto our lifecycle."""

    def __init__(self, status: str | None):
        self.status = status
        super().__init__(f"Unrecognised supplier status: {status!r}")
