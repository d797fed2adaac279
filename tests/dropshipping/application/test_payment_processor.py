"""Application tests for the payment confirmation gate."""

import pytest

from dropshipping.exceptions import OrderNotFoundError
from dropshipping.order.order import OrderStatus, PaymentStatus
from dropshipping.pipeline.payment import PaymentProcessor
from dropshipping.pipeline.results import Outcome


@pytest.fixture()
def processor(dispatcher):
    return PaymentProcessor(dispatcher)


class TestConfirmPayment:
    def test_clean_order_goes_to_supplier(self, processor, aliexpress, make_order, reload):
        order = make_order(payment_status="unpaid")

        outcome = processor.confirm_payment(str(order.id))

        assert outcome.dispatched is True
        assert outcome.dispatch.outcome == Outcome.SENT
        assert outcome.risk.is_flagged is False
        stored = reload(order)
        assert stored.payment_status == PaymentStatus.PAID.value
        assert stored.risk_score == 0
        assert stored.is_flagged_for_review is False
        assert stored.supplier_order_id == f"ALIEXPRESS-{order.id}"
        assert len(aliexpress.created_orders) == 1

    def test_flagged_order_is_held(self, processor, aliexpress, make_order, reload):
        order = make_order(payment_status="unpaid", total=5000.0)

        outcome = processor.confirm_payment(str(order.id))

        assert outcome.dispatched is False
        assert outcome.held_for_review is True
        stored = reload(order)
        assert stored.payment_status == PaymentStatus.PAID.value
        assert stored.is_flagged_for_review is True
        assert stored.risk_score == 40
        assert stored.supplier_order_id is None
        assert aliexpress.created_orders == []

    def test_send_anyway_on_high_risk(self, dispatcher, aliexpress, make_order, reload):
        processor = PaymentProcessor(dispatcher, send_anyway_on_high_risk=True)
        order = make_order(payment_status="unpaid", total=5000.0)

        outcome = processor.confirm_payment(str(order.id))

        assert outcome.dispatched is True
        assert reload(order).is_flagged_for_review is True
        assert len(aliexpress.created_orders) == 1

    def test_supplier_failure_is_reported_not_raised(self, processor, aliexpress, make_order, reload):
        aliexpress.configure(should_succeed=False)
        order = make_order(payment_status="unpaid")

        outcome = processor.confirm_payment(str(order.id))

        assert outcome.dispatched is False
        assert outcome.dispatch.outcome == Outcome.FAILED
        assert reload(order).payment_status == PaymentStatus.PAID.value

    def test_missing_order(self, processor):
        with pytest.raises(OrderNotFoundError):
            processor.confirm_payment("no-such-order")


class TestFailPayment:
    def test_order_is_cancelled(self, processor, aliexpress, make_order, reload):
        order = make_order(payment_status="unpaid")

        processor.fail_payment(str(order.id))

        stored = reload(order)
        assert stored.payment_status == PaymentStatus.FAILED.value
        assert stored.status == OrderStatus.CANCELLED.value
        assert aliexpress.created_orders == []

    def test_missing_order(self, processor):
        with pytest.raises(OrderNotFoundError):
            processor.fail_payment("no-such-order")
