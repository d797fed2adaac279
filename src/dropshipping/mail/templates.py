"""Plain-text order email for suppliers without an API."""

from dropshipping.supplier.normalized import NormalizedOrder


class SupplierOrderTemplate:
    @staticmethod
    def render(order: NormalizedOrder) -> dict:
        customer = order.customer
        address = order.shipping_address
        items = "\n".join(
            f"- {item.name} x{item.quantity} (supplier SKU: {item.supplier_sku or 'N/A'})" for item in order.items
        )
        region = f" ({address.region})" if address.region else ""
        return {
            "subject": f"New order {order.order_id}",
            "body": (
                "Supplier order\n"
                "--------------\n"
                f"Order ID: {order.order_id}\n"
                f"Customer: {customer.name}\n"
                f"Email: {customer.email or '-'}\n"
                f"Phone: {customer.phone or '-'}\n\n"
                "Shipping:\n"
                f"{address.line1}\n"
                f"{address.line2}\n"
                f"{address.postal_code} {address.city}\n"
                f"{address.country}{region}\n\n"
                "Items:\n"
                f"{items}\n"
            ),
        }
