"""Application tests for the scheduled retry and tracking sync jobs."""

from unittest.mock import patch

import pytest

from dropshipping.order.order import OrderStatus
from dropshipping.pipeline.jobs import retry_failed_dispatches, sync_tracking
from dropshipping.pipeline.results import Outcome
from dropshipping.pipeline.tracking import TrackingUpdater


@pytest.fixture()
def updater(suppliers, event_log):
    return TrackingUpdater(suppliers, event_log=event_log)


class TestRetryFailedDispatches:
    def test_failed_order_is_sent_again(self, dispatcher, aliexpress, make_order, reload):
        order = make_order(supplier_order_status="PENDING", auto_order_attempts=1, auto_order_error="timeout")

        result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert result.processed == 1
        assert result.updated == 1
        stored = reload(order)
        assert stored.supplier_order_id is not None
        assert stored.auto_order_attempts == 2

    def test_attempt_ceiling(self, dispatcher, aliexpress, make_order):
        make_order(auto_order_attempts=3, auto_order_error="timeout")

        result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert result.processed == 0
        assert aliexpress.created_orders == []

    def test_only_paid_processing_orders(self, dispatcher, aliexpress, make_order):
        make_order(payment_status="unpaid")
        make_order(status=OrderStatus.CANCELLED.value)
        make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER")

        result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert result.processed == 0
        assert aliexpress.created_orders == []

    def test_failures_are_counted(self, dispatcher, aliexpress, make_order, reload):
        aliexpress.configure(should_succeed=False)
        order = make_order()

        result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert len(result.failures) == 1
        assert reload(order).auto_order_attempts == 1

    def test_store_scope(self, dispatcher, aliexpress, make_order):
        make_order(store_id="store-1")
        make_order(store_id="store-2")

        result = retry_failed_dispatches(dispatcher, max_attempts=3, store_id="store-2")

        assert result.processed == 1

    def test_orders_held_for_review_are_not_sent(self, dispatcher, aliexpress, make_order):
        make_order(is_flagged_for_review=True, risk_score=80)

        result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert result.processed == 0
        assert aliexpress.created_orders == []

    def test_held_orders_sent_when_risk_is_overridden(self, dispatcher, aliexpress, make_order):
        make_order(is_flagged_for_review=True, risk_score=80)

        result = retry_failed_dispatches(dispatcher, max_attempts=3, send_anyway_on_high_risk=True)

        assert result.updated == 1
        assert len(aliexpress.created_orders) == 1

    def test_error_on_one_order_does_not_abort_the_batch(self, dispatcher, aliexpress, make_order, reload):
        broken = make_order()
        healthy = make_order()
        real_dispatch = dispatcher.dispatch

        def dispatch(order_id):
            if order_id == str(broken.id):
                raise RuntimeError("database is down")
            return real_dispatch(order_id)

        with patch.object(dispatcher, "dispatch", side_effect=dispatch):
            result = retry_failed_dispatches(dispatcher, max_attempts=3)

        assert result.processed == 2
        assert result.updated == 1
        assert [f.order_id for f in result.failures] == [str(broken.id)]
        assert result.failures[0].error == "database is down"
        assert reload(healthy).supplier_order_id is not None


class TestSyncTracking:
    def test_orders_in_transit_are_synced(self, updater, aliexpress, make_order, reload):
        order = make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER")
        aliexpress.set_status("ALI-1", "shipped", tracking_number="TRK-1")

        result = sync_tracking(updater)

        assert result.processed == 1
        assert result.updated == 1
        assert reload(order).tracking_number == "TRK-1"

    def test_delivered_and_unsent_orders_are_ignored(self, updater, aliexpress, make_order):
        make_order(supplier_order_id="ALI-1", status=OrderStatus.DELIVERED.value)
        make_order()

        result = sync_tracking(updater)

        assert result.processed == 0
        assert aliexpress.tracking_queries == []

    def test_failures_are_isolated(self, updater, aliexpress, make_order, reload):
        failing = make_order(supplier_order_id="ALI-1", supplier_order_status="SENT_TO_SUPPLIER")
        healthy = make_order(supplier_order_id="ALI-2", supplier_order_status="SENT_TO_SUPPLIER")
        aliexpress.fail_for("ALI-1")
        aliexpress.set_status("ALI-2", "delivered")

        result = sync_tracking(updater)

        assert result.processed == 2
        assert [f.order_id for f in result.failures] == [str(failing.id)]
        assert result.failures[0].outcome == Outcome.FAILED
        assert reload(healthy).status == OrderStatus.DELIVERED.value
