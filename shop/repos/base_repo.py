# shop/repos/base_repo.py
from typing import Generic, List, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepo(Generic[T]):
    model: Type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, obj_id: int) -> T | None:
        return self.db.get(self.model, obj_id)

    def get_all(self) -> List[T]:
        return list(self.db.execute(select(self.model).order_by(self.model.id)).unique().scalars().all())

    def add(self, obj: T) -> T:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def commit(self):
        self.db.commit()
