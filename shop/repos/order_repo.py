# shop/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop.data.models.order import OrderModel
from shop.data.models.status import StatusModel
from shop.utils.settings import ORDER_NUMBER_PREFIX


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        # flush zeby dostac id, z niego numer zamowienia
        self.db.flush()
        order.number = f"{ORDER_NUMBER_PREFIX}{order.id:06d}"
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_by_number(self, number: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.number == number)
        ).unique().scalar_one_or_none()

    def get_by_cart_token(self, token: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.cart_token == token)
        ).unique().scalar_one_or_none()

    def list_orders(self) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).unique().scalars().all()
        )

    def update_order_status(self, order: OrderModel, status: StatusModel, manager=None) -> OrderModel:
        order.status = status
        if manager is not None:
            order.manager = manager
        self.db.commit()
        self.db.refresh(order)
        return order

    def rollback(self):
        self.db.rollback()
