from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship, validates

from shop.data.database import Base
from shop.data.models.base import EqualityMixin, blank_to_empty


class UserModel(EqualityMixin, Base):
    __tablename__ = "users"
    # dwa wpisy z tym samym imieniem, mailem i telefonem to ten sam klient
    __equality_fields__ = ("name", "email", "phone")

    name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")

    # login i haslo tylko dla managerow/adminow
    username = Column(String, nullable=False, default="", index=True)
    password = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")

    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    role = relationship("RoleModel", back_populates="users", lazy="joined")

    client_orders = relationship(
        "OrderModel",
        back_populates="client",
        foreign_keys="OrderModel.client_id",
        cascade="all, delete-orphan",
    )
    manager_orders = relationship(
        "OrderModel",
        back_populates="manager",
        foreign_keys="OrderModel.manager_id",
    )

    def __init__(self, name="", email="", phone="", role=None, **kwargs):
        super().__init__(name=name, email=email, phone=phone, role=role, **kwargs)
        for field in ("username", "password", "description"):
            if getattr(self, field) is None:
                setattr(self, field, "")

    @validates("name", "email", "phone", "username", "password", "description")
    def _validate_text(self, key, value):
        return blank_to_empty(value)

    def __repr__(self):
        return f"<User {self.name!r} {self.email!r} {self.phone!r}>"
