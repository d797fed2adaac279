"""Which supplier an order goes to, and under which SKUs."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.catalogue.product import Product
from dropshipping.order.order import Order, OrderItem


def load_product(product_id: str | None) -> Product | None:
    if not product_id:
        return None
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def resolve_supplier_sku(item: OrderItem, product: Product | None) -> str:
    """The identifier the supplier sees for a line item.

    Priority: product supplier SKU, variant SKU, supplier product id, our product id.
    """
    variant = product.variant(item.variant_id) if product else None
    return (
        (product.supplier_sku if product else None)
        or (variant.sku if variant else None)
        or (product.supplier_product_id if product else None)
        or str(item.product_id)
    )


def supplier_name_for(order: Order) -> str | None:
    """Supplier named on the first item's product, if any."""
    if not order.items:
        return None
    product = load_product(order.items[0].product_id)
    return product.supplier_name if product and product.supplier_name else None
