import logging
from typing import Any, Dict, Mapping

from checkout.domain.schemas import Receipt
from checkout.domain.validation import OrderValidationError, sanitize, validate_order
from checkout.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


class OrderIntakeService:
    """
    Server side of the checkout: validate, price, persist.

    Validation always finishes before the repository is called, so a rejected
    submission never leaves a partial row behind.
    """

    def __init__(self, order_repo: IOrderRepository, unit_price_cents: int):
        self.order_repo = order_repo
        self.unit_price_cents = unit_price_cents

    def create_order(self, raw: Mapping[str, Any], user_agent: str = "", ip: str = "") -> Receipt:
        clean = sanitize(raw)

        errors = validate_order(clean)
        if errors:
            logger.info(f"Order rejected: {sorted(errors)}")
            raise OrderValidationError(errors)

        total_cents = self.unit_price_cents * clean.qty
        receipt = self.order_repo.create_order(
            clean,
            unit_price_cents=self.unit_price_cents,
            total_cents=total_cents,
            user_agent=user_agent,
            ip=ip,
        )
        logger.info(f"Order {receipt.id} created: qty={clean.qty} total_cents={total_cents}")
        return receipt

    def check_health(self) -> Dict[str, Any]:
        return self.order_repo.check_health()
