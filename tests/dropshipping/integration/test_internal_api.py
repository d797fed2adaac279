"""Integration tests for the scheduler-only internal endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dropshipping.api.routes import internal_router
from dropshipping.config import DropshippingConfig

TOKEN = {"x-internal-token": "cron-secret"}


@pytest.fixture()
def client(suppliers):
    app = FastAPI()
    app.include_router(internal_router)
    app.state.dropshipping_config = DropshippingConfig(
        default_supplier="aliexpress",
        internal_cron_token="cron-secret",
    )
    app.state.suppliers = suppliers
    return TestClient(app)


class TestInternalToken:
    @pytest.mark.parametrize(
        "path",
        ["/internal/poll-supplier-status", "/internal/retry-failed-dispatches", "/internal/sync-tracking"],
    )
    def test_token_required(self, client, path):
        assert client.post(path).status_code == 401
        assert client.post(path, headers={"x-internal-token": "wrong"}).status_code == 401

    def test_unset_token_rejects_everything(self, suppliers):
        app = FastAPI()
        app.include_router(internal_router)
        app.state.dropshipping_config = DropshippingConfig()
        app.state.suppliers = suppliers

        response = TestClient(app).post("/internal/poll-supplier-status", headers={"x-internal-token": ""})

        assert response.status_code == 401


class TestJobs:
    def test_poll_supplier_status(self, client, aliexpress, make_order):
        make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER")
        make_order(supplier_order_id="ALI-2", supplier_order_status="SENT_TO_SUPPLIER")
        aliexpress.set_status("ALI-1", "shipped")
        aliexpress.fail_for("ALI-2")

        response = client.post("/internal/poll-supplier-status", headers=TOKEN)

        assert response.status_code == 200
        assert response.json() == {"processed": 2, "updated": 1, "failed": 1}

    def test_poll_scoped_to_store(self, client, aliexpress, make_order):
        make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER", store_id="store-1")
        make_order(supplier_order_id="ALI-2", supplier_order_status="SENT_TO_SUPPLIER", store_id="store-2")

        response = client.post("/internal/poll-supplier-status", json={"store_id": "store-1"}, headers=TOKEN)

        assert response.json()["processed"] == 1
        assert aliexpress.status_queries == ["ALI-1"]

    def test_retry_failed_dispatches(self, client, aliexpress, make_order):
        make_order(auto_order_attempts=1, auto_order_error="timeout")
        make_order(auto_order_attempts=3, auto_order_error="timeout")

        response = client.post("/internal/retry-failed-dispatches", headers=TOKEN)

        assert response.json() == {"processed": 1, "updated": 1, "failed": 0}
        assert len(aliexpress.created_orders) == 1

    def test_sync_tracking(self, client, aliexpress, make_order):
        make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER")
        aliexpress.set_status("ALI-1", "delivered", tracking_number="TRK-1")

        response = client.post("/internal/sync-tracking", headers=TOKEN)

        assert response.json() == {"processed": 1, "updated": 1, "failed": 0}
