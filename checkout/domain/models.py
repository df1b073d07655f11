from sqlalchemy import Column, Integer, Text, DateTime, Uuid, text
from sqlalchemy.sql import func
from checkout.infrastructure.database import Base

class Order(Base):
    __tablename__ = "orders"

    # Orders are write-once: no code path updates or deletes a row.
    id = Column(Uuid, primary_key=True, server_default=text("gen_random_uuid()"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    address1 = Column(Text, nullable=False)
    address2 = Column(Text)
    city = Column(Text, nullable=False)
    state = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    pin = Column(Text, nullable=False)

    qty = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)
    total_cents = Column(Integer, nullable=False)

    user_agent = Column(Text)
    ip = Column(Text)

    # Fetch id/created_at with RETURNING on insert
    __mapper_args__ = {"eager_defaults": True}
