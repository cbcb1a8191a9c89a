from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship, validates

from shop.data.database import Base
from shop.data.models.base import EqualityMixin, blank_to_empty


class CategoryModel(EqualityMixin, Base):
    __tablename__ = "categories"
    __equality_fields__ = ("url",)

    title = Column(String, nullable=False, default="")
    url = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=False, default="")

    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=True)
    photo = relationship("PhotoModel")

    products = relationship("ProductModel", back_populates="category")

    @validates("title", "url", "description")
    def _validate_text(self, key, value):
        return blank_to_empty(value)
