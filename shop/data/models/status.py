from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from shop.data.database import Base
from shop.data.models.base import EqualityMixin
from shop.domain.enums import StatusName


class StatusModel(EqualityMixin, Base):
    __tablename__ = "statuses"
    __equality_fields__ = ("title",)

    title = Column(Enum(StatusName, name="status_name"), nullable=False, unique=True)
    description = Column(String, nullable=False, default="")

    orders = relationship("OrderModel", back_populates="status")
