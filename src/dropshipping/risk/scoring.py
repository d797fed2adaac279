"""Order risk heuristics.

Additive score over independent signals:

    total >= 4000                   +40  high_value
    total >= 2500                   +25  medium_value      (only if not high_value)
    ships outside Norway            +20  non_local_country
    >= 3 other orders within 24h    +30  many_orders_24h
    exactly 2 other orders in 24h   +15  multiple_orders_24h

An order is flagged at 50 points, and always when it is high value.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dropshipping.catalogue.customer import Customer
from dropshipping.exceptions import OrderNotFoundError
from dropshipping.order.address import parse_shipping_address, shipping_country
from dropshipping.order.order import Order

HIGH_VALUE_THRESHOLD = 4000
MEDIUM_VALUE_THRESHOLD = 2500
FLAG_THRESHOLD = 50
LOCAL_COUNTRY = "NO"
RECENT_WINDOW = timedelta(hours=24)


@dataclass
class RiskResult:
    risk_score: int = 0
    flags: list[str] = field(default_factory=list)
    is_flagged: bool = False

    def add(self, points: int, flag: str) -> None:
        self.risk_score += points
        if flag not in self.flags:
            self.flags.append(flag)


class RiskScorer:
    def __init__(self, now=None):
        # Injectable clock for the 24h window
        self._now = now or (lambda: datetime.now(UTC))

    def evaluate_order_risk(self, order_id: str) -> RiskResult:
        try:
            order = current_domain.repository_for(Order).get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFoundError(order_id) from None

        result = RiskResult()

        total = float(order.total or 0)
        if total >= HIGH_VALUE_THRESHOLD:
            result.add(40, "high_value")
        elif total >= MEDIUM_VALUE_THRESHOLD:
            result.add(25, "medium_value")

        country = shipping_country(parse_shipping_address(order.shipping_address))
        if country and str(country).upper() != LOCAL_COUNTRY:
            result.add(20, "non_local_country")

        recent = self._recent_order_count(order)
        if recent >= 3:
            result.add(30, "many_orders_24h")
        elif recent == 2:
            result.add(15, "multiple_orders_24h")

        result.is_flagged = result.risk_score >= FLAG_THRESHOLD or "high_value" in result.flags
        return result

    def _recent_order_count(self, order: Order) -> int:
        """Other orders in the same store by the same customer id or email in the last 24h."""
        customer_ids: set[str] = set()
        if order.customer_id:
            customer_ids.add(str(order.customer_id))
            email = self._customer_email(order.customer_id)
            if email:
                same_email = (
                    current_domain.repository_for(Customer)._dao.query.filter(email=email).limit(1000).all().items
                )
                customer_ids.update(str(c.id) for c in same_email)

        return current_domain.repository_for(Order).count_recent_for_customers(
            store_id=order.store_id,
            customer_ids=sorted(customer_ids),
            since=self._now() - RECENT_WINDOW,
            exclude_order_id=str(order.id),
        )

    @staticmethod
    def _customer_email(customer_id: str) -> str | None:
        try:
            customer = current_domain.repository_for(Customer).get(customer_id)
        except ObjectNotFoundError:
            return None
        return customer.email or None
