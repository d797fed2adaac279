"""Order placement — command and handler.

Checkout hands over a finished order: line items, the raw shipping address
blob and the total. Payment is confirmed separately.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from dropshipping.domain import dropshipping
from dropshipping.order.order import Order, PaymentStatus


@dropshipping.command(part_of="Order")
class PlaceOrder:
    """Record a new order coming out of checkout."""

    store_id = String(max_length=100)
    customer_id = Identifier()
    items = Text(required=True)  # JSON list of item dicts
    shipping_address = Text()  # JSON object, stored verbatim
    total = Float(required=True, min_value=0.0)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)


@dropshipping.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = Order.place(
            store_id=command.store_id,
            customer_id=command.customer_id,
            items_data=items_data,
            shipping_address=command.shipping_address,
            total=command.total,
            payment_status=command.payment_status,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
