"""Shared BDD fixtures and step definitions for the Dropshipping domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from dropshipping.order.order import Order
from dropshipping.supplier.registry import SupplierName


@pytest.fixture()
def context():
    """Scenario state shared between steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product sold by "{supplier}"'), target_fixture="product")
def product_sold_by(make_product, supplier):
    return make_product(supplier_name=supplier, supplier_sku=f"{supplier.upper()}-SKU-1")


@given(parsers.cfparse("a paid order for that product worth {total:g}"), target_fixture="order")
def paid_order(make_order, product, total):
    return make_order(product=product, total=total)


@given(parsers.cfparse("an unpaid order for that product worth {total:g}"), target_fixture="order")
def unpaid_order(make_order, product, total):
    return make_order(product=product, total=total, payment_status="unpaid")


@given(parsers.cfparse('the supplier "{supplier}" is down'))
def supplier_down(fakes, supplier):
    fakes[SupplierName.parse(supplier)].configure(should_succeed=False, failure_reason="Supplier unavailable")


@given(parsers.cfparse('the supplier "{supplier}" is back up'))
def supplier_up(fakes, supplier):
    fakes[SupplierName.parse(supplier)].configure(should_succeed=True)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order supplier status is "{status}"'))
def order_supplier_status(order, status):
    stored = current_domain.repository_for(Order).get(str(order.id))
    assert stored.supplier_order_status == status


@then(parsers.cfparse('the order status is "{status}"'))
def order_status(order, status):
    stored = current_domain.repository_for(Order).get(str(order.id))
    assert stored.status == status


@then(parsers.cfparse("the order has {count:d} supplier events"))
def supplier_event_count(order, event_log, count):
    assert len(event_log.events_for(str(order.id))) == count


@then(parsers.cfparse('the supplier "{supplier}" received {count:d} orders'))
def supplier_received(fakes, supplier, count):
    assert len(fakes[SupplierName.parse(supplier)].created_orders) == count
