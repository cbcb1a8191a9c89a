# shop/data/models/base.py
from typing import Tuple

from sqlalchemy import Column, Integer


class EqualityMixin:
    """
    Tozsamosc (id) + rownosc po kluczu biznesowym.
    Kazda encja wskazuje swoje pola w __equality_fields__.
    """

    __equality_fields__: Tuple[str, ...] = ()

    id = Column(Integer, primary_key=True)

    def equality_key(self) -> tuple:
        if not self.__equality_fields__:
            return (self.id,)
        return tuple(getattr(self, f) for f in self.__equality_fields__)

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self.equality_key() == other.equality_key()

    def __hash__(self):
        return hash((type(self).__name__,) + self.equality_key())


def blank_to_empty(value: str | None) -> str:
    if value is None or not str(value).strip():
        return ""
    return value
