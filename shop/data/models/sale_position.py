from decimal import Decimal

from sqlalchemy import Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship, validates

from shop.data.database import Base
from shop.domain.errors import ValidationError


class SalePositionModel(Base):
    __tablename__ = "sale_positions"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True)

    number = Column(Integer, nullable=False, default=1)
    # cena z chwili sprzedazy, nie zmienia sie razem z produktem
    price = Column(Numeric(10, 2), nullable=False)

    product = relationship("ProductModel", lazy="joined")
    order = relationship("OrderModel", back_populates="sale_positions")

    @validates("number")
    def _validate_number(self, key, value):
        if value is None or value < 1:
            raise ValidationError("Quantity must be at least 1")
        return value

    @validates("price")
    def _validate_price(self, key, value):
        value = Decimal(str(value))
        if self.price is not None and Decimal(str(self.price)) != value:
            raise ValidationError("Sale position price is immutable")
        return value

    @property
    def total(self) -> Decimal:
        return Decimal(str(self.price)) * self.number
