"""Product aggregate — catalogue entries with their supplier sourcing details.

Only the attributes the fulfillment pipeline needs are modelled: which
supplier sells the product and under what identifiers. A product may have
variants, each with its own SKU.
"""

from protean.fields import HasMany, String

from dropshipping.domain import dropshipping


@dropshipping.entity(part_of="Product")
class Variant:
    name = String(max_length=200)
    sku = String(max_length=100)


@dropshipping.aggregate
class Product:
    name = String(required=True, max_length=300)
    supplier_name = String(max_length=50)
    supplier_sku = String(max_length=100)
    supplier_product_id = String(max_length=100)
    supplier_url = String(max_length=1000)
    variants = HasMany(Variant)

    def variant(self, variant_id: str | None) -> Variant | None:
        """Return the variant with the given id, if this product has it."""
        if not variant_id:
            return None
        return next((v for v in (self.variants or []) if str(v.id) == str(variant_id)), None)
