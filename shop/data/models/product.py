from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship, validates

from shop.data.database import Base
from shop.data.models.base import EqualityMixin, blank_to_empty


class ProductModel(EqualityMixin, Base):
    __tablename__ = "products"
    __equality_fields__ = ("article",)

    title = Column(String, nullable=False, default="")
    # url i artykul unikalne wsrod aktywnych produktow, pilnuje ProductService
    url = Column(String, nullable=False, default="", index=True)
    article = Column(Integer, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    parameters = Column(String, nullable=False, default="")
    available = Column(Boolean, nullable=False, default=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    category = relationship("CategoryModel", back_populates="products", lazy="joined")

    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=True)
    photo = relationship("PhotoModel")

    @validates("title", "url", "description", "parameters")
    def _validate_text(self, key, value):
        return blank_to_empty(value)
