from typing import Any, Dict

from sqlalchemy import text
from checkout.interfaces.IOrderRepository import IOrderRepository
from checkout.domain.models import Order
from checkout.domain.schemas import CleanOrder, Receipt
from checkout.infrastructure.database import SessionLocal


class PostgresOrderRepository(IOrderRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_order(self, order: CleanOrder, unit_price_cents: int, total_cents: int,
                     user_agent: str = "", ip: str = "") -> Receipt:
        session = self.session_factory()
        try:
            new_order = Order(
                name=order.name,
                email=order.email,
                phone=order.phone,
                address1=order.address1,
                address2=order.address2,
                city=order.city,
                state=order.state,
                country=order.country,
                pin=order.pin,
                qty=order.qty,
                unit_price_cents=unit_price_cents,
                total_cents=total_cents,
                user_agent=user_agent,
                ip=ip,
            )
            session.add(new_order)
            session.commit()
            return Receipt(id=new_order.id, created_at=new_order.created_at, total_cents=total_cents)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_health(self) -> Dict[str, Any]:
        """Read-only probe: server time and version string."""
        session = self.session_factory()
        try:
            row = session.execute(text("select now() as now, version() as version")).one()
            return {"now": row.now, "version": row.version}
        finally:
            session.close()
