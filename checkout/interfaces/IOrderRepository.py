from abc import ABC, abstractmethod
from typing import Any, Dict

from checkout.domain.schemas import CleanOrder, Receipt

class IOrderRepository(ABC):
    @abstractmethod
    def create_order(self, order: CleanOrder, unit_price_cents: int, total_cents: int,
                     user_agent: str = "", ip: str = "") -> Receipt:
        pass

    @abstractmethod
    def check_health(self) -> Dict[str, Any]:
        pass
