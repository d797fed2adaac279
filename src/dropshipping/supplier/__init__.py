"""Pluggable dropshipping supplier integrations."""

from dropshipping.supplier.normalized import (
    NormalizedAddress,
    NormalizedCustomer,
    NormalizedItem,
    NormalizedOrder,
)
from dropshipping.supplier.port import SupplierPort
from dropshipping.supplier.registry import SupplierName, SupplierRegistry

__all__ = [
    "NormalizedAddress",
    "NormalizedCustomer",
    "NormalizedItem",
    "NormalizedOrder",
    "SupplierName",
    "SupplierPort",
    "SupplierRegistry",
]
