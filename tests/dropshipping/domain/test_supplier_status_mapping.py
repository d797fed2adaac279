"""Tests for mapping supplier status strings onto SupplierOrderStatus."""

import pytest

from dropshipping.order.order import SupplierOrderStatus
from dropshipping.supplier.status import map_supplier_status


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("pending", SupplierOrderStatus.SENT_TO_SUPPLIER),
        ("confirmed", SupplierOrderStatus.ACCEPTED_BY_SUPPLIER),
        ("accepted", SupplierOrderStatus.ACCEPTED_BY_SUPPLIER),
        ("shipped", SupplierOrderStatus.SHIPPED),
        ("delivered", SupplierOrderStatus.DELIVERED),
        ("cancelled", SupplierOrderStatus.CANCELLED),
        ("canceled", SupplierOrderStatus.CANCELLED),
    ],
)
def test_known_supplier_statuses(raw, expected):
    assert map_supplier_status(raw) == expected


def test_enum_names_map_to_themselves():
    assert map_supplier_status("ACCEPTED_BY_SUPPLIER") == SupplierOrderStatus.ACCEPTED_BY_SUPPLIER
    assert map_supplier_status("SHIPPED") == SupplierOrderStatus.SHIPPED


def test_mapping_is_case_insensitive():
    assert map_supplier_status("  Delivered ") == SupplierOrderStatus.DELIVERED


def test_unknown_status_is_none():
    assert map_supplier_status("lost_in_space") is None
    assert map_supplier_status(None) is None
    assert map_supplier_status("") is None
