# shop/services/status_service.py

from sqlalchemy.orm import Session

from shop.data.models.order import OrderModel
from shop.data.models.status import StatusModel
from shop.data.models.user import UserModel
from shop.domain.enums import DEFAULT_STATUS, StatusName, can_transition
from shop.domain.errors import NotFoundError, TransitionError
from shop.repos.order_repo import OrderRepo
from shop.repos.status_repo import StatusRepo
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class StatusService:
    def __init__(self, db: Session):
        self.repo = StatusRepo(db)
        self.order_repo = OrderRepo(db)

    def get(self, title: StatusName) -> StatusModel:
        status = self.repo.get_by_title(StatusName(title))
        if status is None:
            raise NotFoundError(f"Can't find status {title}")
        return status

    def get_default(self) -> StatusModel:
        return self.repo.get_or_create(DEFAULT_STATUS)

    def change_order_status(
        self,
        order: OrderModel,
        new_status: StatusName,
        manager: UserModel | None = None,
    ) -> OrderModel:
        """
        Zmiana statusu przez managera, tylko w zamknietym zbiorze przejsc
        NEW -> ACCEPTED/REJECTED -> DONE.
        """
        new_status = StatusName(new_status)
        current = StatusName(order.status.title)

        if not can_transition(current, new_status):
            raise TransitionError(f"Order {order.number} can't go from {current.value} to {new_status.value}")

        status = self.repo.get_or_create(new_status)
        updated = self.order_repo.update_order_status(order, status, manager)

        logger.info(f"Order {order.number}: {current.value} -> {new_status.value}")
        return updated
