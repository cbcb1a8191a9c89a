from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from shop.data.database import Base
from shop.data.models.base import EqualityMixin
from shop.domain.enums import RoleName


class RoleModel(EqualityMixin, Base):
    __tablename__ = "roles"
    __equality_fields__ = ("title",)

    title = Column(Enum(RoleName, name="role_name"), nullable=False, unique=True)
    description = Column(String, nullable=False, default="")

    users = relationship("UserModel", back_populates="role")
