from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shop.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    # numer nadawany po flushu, z id zamowienia
    number = Column(String, nullable=True, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    shipping_address = Column(String, nullable=False, default="")
    details = Column(String, nullable=False, default="")
    # token koszyka, z ktorego powstalo zamowienie; jeden koszyk, jedno zamowienie
    cart_token = Column(String, nullable=True, unique=True, index=True)

    status_id = Column(Integer, ForeignKey("statuses.id"), nullable=False)
    status = relationship("StatusModel", back_populates="orders", lazy="joined")

    client_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    client = relationship(
        "UserModel",
        back_populates="client_orders",
        foreign_keys=[client_id],
        lazy="joined",
    )

    manager_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    manager = relationship(
        "UserModel",
        back_populates="manager_orders",
        foreign_keys=[manager_id],
    )

    sale_positions = relationship(
        "SalePositionModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="SalePositionModel.id",
    )

    @property
    def total(self) -> Decimal:
        return sum((p.total for p in self.sale_positions), Decimal("0.00"))
