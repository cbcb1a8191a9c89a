# shop/services/order_service.py
import uuid
from typing import List

from sqlalchemy.orm import Session

from shop.data.models.order import OrderModel
from shop.data.models.sale_position import SalePositionModel
from shop.domain.errors import NotFoundError, NotificationFailure
from shop.repos.order_repo import OrderRepo
from shop.services.cart_service import CartService
from shop.services.lock_service import LockService
from shop.services.notification_service import NotificationService
from shop.services.status_service import StatusService
from shop.services.user_service import UserService, require_text
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis zamowien: checkout z koszyka sesji i odczyt zamowien.
    """

    def __init__(
        self,
        db: Session,
        cart_service: CartService,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_service = cart_service
        self.lock_service = lock_service
        self.users = UserService(db)
        self.statuses = StatusService(db)
        self.notification_service = notification_service or NotificationService()

    def checkout(self, session_id: str, name: str, email: str, phone: str) -> OrderModel | None:
        """
        Use Case: zamowienie z koszyka sesji.

        1. Blokada checkoutu dla sesji (drugi submit -> None)
        2. Pusty koszyk -> None, zadne zamowienie nie powstaje
        3. Klient + domyslny status, kopia pozycji koszyka
        4. Zapis, potem powiadomienie (best-effort), na koncu czyszczenie koszyka
        """
        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(session_id, token):
            logger.warning(f"Checkout already in progress for session {session_id}")
            return None

        try:
            cart = self.cart_service.get_cart(session_id)
            if cart.is_empty():
                logger.info(f"Checkout on empty cart for session {session_id}, nothing to do")
                return None

            # ten sam koszyk juz zamowiony, a czyszczenie sie nie udalo
            previous = self.repo.get_by_cart_token(cart.token)
            if previous is not None:
                logger.warning(
                    f"Cart of session {session_id} already ordered as {previous.number}"
                )
                self._clear_cart(session_id)
                return None

            require_text(name=name, email=email, phone=phone)

            client = self.users.get_or_create_client(name, email, phone)
            status = self.statuses.get_default()

            # nowe wiersze, niezalezne od koszyka
            positions = [
                SalePositionModel(product_id=p.product_id, number=p.number, price=p.price)
                for p in cart.positions
            ]
            order = OrderModel(
                status=status,
                client=client,
                sale_positions=positions,
                cart_token=cart.token,
            )

            try:
                created = self.repo.create_order(order)
            except Exception:
                self.repo.rollback()
                raise

            logger.info(
                f"Order {created.number} created for session {session_id}: "
                f"{len(positions)} positions, total {created.total}"
            )

            try:
                sent = self.notification_service.send_order_notification(created)
            except NotificationFailure as e:
                logger.warning(f"Notification for order {created.number} failed: {e}")
                sent = False
            except Exception:
                logger.exception(f"Notification for order {created.number} crashed")
                sent = False
            if not sent:
                logger.warning(f"Order {created.number} saved without notification")

            self._clear_cart(session_id)
            return created

        finally:
            self.lock_service.release_checkout_lock(session_id, token)

    def _clear_cart(self, session_id: str) -> None:
        # zamowienie jest juz zapisane, blad sesji nie moze go cofnac
        try:
            self.cart_service.clear(session_id)
        except Exception:
            logger.exception(f"Can't clear cart of session {session_id} after checkout")

    #query
    def get_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError(f"Can't find order with id {order_id}")
        return order

    def get_by_number(self, number: str) -> OrderModel:
        order = self.repo.get_by_number(number)
        if not order:
            raise NotFoundError(f"Can't find order {number}")
        return order

    def get_all(self) -> List[OrderModel]:
        return self.repo.list_orders()
