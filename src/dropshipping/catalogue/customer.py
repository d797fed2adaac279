"""The buyer's contact details as fulfillment sees them."""

from protean.fields import String

from dropshipping.domain import dropshipping


@dropshipping.aggregate
class Customer:
    name = String(max_length=200)
    email = String(max_length=254)
    phone = String(max_length=50)
