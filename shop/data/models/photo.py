from sqlalchemy import Column, String
from sqlalchemy.orm import validates

from shop.data.database import Base
from shop.data.models.base import EqualityMixin, blank_to_empty


class PhotoModel(EqualityMixin, Base):
    __tablename__ = "photos"
    __equality_fields__ = ("title",)

    title = Column(String, nullable=False, default="", index=True)
    photo_link_short = Column(String, nullable=False, default="")
    photo_link_long = Column(String, nullable=False, default="")

    @validates("title", "photo_link_short", "photo_link_long")
    def _validate_text(self, key, value):
        return blank_to_empty(value)
