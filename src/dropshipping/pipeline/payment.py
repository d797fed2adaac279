"""Payment outcome handling — the gate between checkout and the supplier.

A confirmed payment marks the order paid and scores it for risk. Orders
that come out clean go straight to the supplier; flagged orders wait for a
human unless the store has chosen to send them anyway.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.exceptions import OrderNotFoundError
from dropshipping.order.order import Order
from dropshipping.pipeline.dispatch import OrderDispatcher
from dropshipping.pipeline.results import DispatchResult
from dropshipping.risk.scoring import RiskResult, RiskScorer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PaymentOutcome:
    order_id: str
    risk: RiskResult
    dispatched: bool
    dispatch: DispatchResult | None = None

    @property
    def held_for_review(self) -> bool:
        return self.dispatch is None


class PaymentProcessor:
    def __init__(
        self,
        dispatcher: OrderDispatcher,
        risk_scorer: RiskScorer | None = None,
        send_anyway_on_high_risk: bool = False,
    ):
        self.dispatcher = dispatcher
        self.risk_scorer = risk_scorer or RiskScorer()
        self.send_anyway_on_high_risk = send_anyway_on_high_risk

    def confirm_payment(self, order_id: str) -> PaymentOutcome:
        repo = current_domain.repository_for(Order)
        order = self._load(repo, order_id)
        order.confirm_payment()
        repo.add(order)

        risk = self.risk_scorer.evaluate_order_risk(order_id)
        order = repo.get(order_id)
        order.record_risk(risk.risk_score, risk.is_flagged)
        repo.add(order)

        if risk.is_flagged and not self.send_anyway_on_high_risk:
            logger.warning(
                "Order held for review, not sent to supplier",
                order_id=order_id,
                risk_score=risk.risk_score,
                flags=risk.flags,
            )
            return PaymentOutcome(order_id=order_id, risk=risk, dispatched=False)

        result = self.dispatcher.dispatch(order_id)
        return PaymentOutcome(order_id=order_id, risk=risk, dispatched=result.sent, dispatch=result)

    def fail_payment(self, order_id: str) -> None:
        repo = current_domain.repository_for(Order)
        order = self._load(repo, order_id)
        order.fail_payment()
        repo.add(order)
        logger.info("Payment failed, order cancelled", order_id=order_id)

    @staticmethod
    def _load(repo, order_id: str) -> Order:
        try:
            return repo.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFoundError(order_id) from None
