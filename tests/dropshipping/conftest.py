import os
from datetime import UTC, datetime

import pytest
from protean import current_domain

from dropshipping.catalogue.customer import Customer
from dropshipping.catalogue.product import Product, Variant
from dropshipping.order.order import Order
from dropshipping.pipeline.dispatch import OrderDispatcher
from dropshipping.supplier.fake_adapter import FakeSupplier
from dropshipping.supplier.registry import SupplierName, SupplierRegistry
from dropshipping.supplier_event.log import SupplierEventLog

OSLO_ADDRESS = {
    "name": "Kari Nordmann",
    "address": "Karl Johans gate 1",
    "city": "Oslo",
    "zip": "0154",
    "country": "NO",
}


@pytest.fixture(scope="session")
def _dropshipping_domain(request):
    """Initialize the dropshipping domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from dropshipping.domain import dropshipping

    dropshipping.init()
    return dropshipping


@pytest.fixture(autouse=True)
def run_around_tests(_dropshipping_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _dropshipping_domain.domain_context()
    ctx.push()

    yield

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Suppliers
# ---------------------------------------------------------------------------
@pytest.fixture()
def fakes():
    """One fake adapter per supplier, keyed by supplier name."""
    return {name: FakeSupplier(prefix=name.value.upper()) for name in SupplierName}


@pytest.fixture()
def suppliers(fakes):
    return SupplierRegistry(fakes, default=SupplierName.ALIEXPRESS)


@pytest.fixture()
def aliexpress(fakes):
    return fakes[SupplierName.ALIEXPRESS]


@pytest.fixture()
def event_log():
    return SupplierEventLog()


@pytest.fixture()
def dispatcher(suppliers, event_log):
    return OrderDispatcher(suppliers, event_log=event_log)


# ---------------------------------------------------------------------------
# Catalogue and orders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_customer():
    return _create_customer


@pytest.fixture()
def make_product():
    return _create_product


@pytest.fixture()
def make_order():
    return _create_order


@pytest.fixture()
def reload():
    return _reload


def _create_customer(name="Kari Nordmann", email="kari@example.com", phone="+4799999999") -> Customer:
    customer = Customer(name=name, email=email, phone=phone)
    current_domain.repository_for(Customer).add(customer)
    return customer


def _create_product(name="USB-C Charger", supplier_name="aliexpress", variants=None, **kwargs) -> Product:
    product = Product(name=name, supplier_name=supplier_name, **kwargs)
    for variant in variants or []:
        product.add_variants(Variant(**variant))
    current_domain.repository_for(Product).add(product)
    return product


def _create_order(
    product=None,
    customer=None,
    store_id="store-1",
    total=499.0,
    shipping_address=OSLO_ADDRESS,
    payment_status="paid",
    quantity=1,
    created_at=None,
    **overrides,
) -> Order:
    """Persist a paid order for one product, with optional field overrides."""
    product = product or _create_product()
    order = Order.place(
        store_id=store_id,
        customer_id=str(customer.id) if customer else None,
        items_data=[
            {
                "product_id": str(product.id),
                "name": "Item as ordered",
                "quantity": quantity,
                "unit_price": total,
            }
        ],
        shipping_address=shipping_address,
        total=total,
        payment_status=payment_status,
        created_at=created_at or datetime.now(UTC),
    )
    for field_name, value in overrides.items():
        setattr(order, field_name, value)
    current_domain.repository_for(Order).add(order)
    return order


def _reload(order: Order) -> Order:
    return current_domain.repository_for(Order).get(str(order.id))
