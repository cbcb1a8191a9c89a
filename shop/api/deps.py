# shop/api/deps.py
import uuid

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from shop.data.database import get_db
from shop.data.models.user import UserModel
from shop.domain.permissions import is_allowed
from shop.services.cart_service import CartService
from shop.services.cart_store import CartStore
from shop.services.lock_service import LockService
from shop.services.notification_service import NotificationService
from shop.services.order_service import OrderService
from shop.services.product_service import ProductService
from shop.services.user_service import UserService

SESSION_COOKIE = "session_id"

security = HTTPBasic(auto_error=False)

_cart_store: CartStore | None = None
_lock_service: LockService | None = None


async def session_middleware(request: Request, call_next):
    """Nadaje id sesji w ciasteczku przy pierwszym wejsciu."""
    session_id = request.cookies.get(SESSION_COOKIE)
    is_new = not session_id
    if is_new:
        session_id = uuid.uuid4().hex
    request.state.session_id = session_id

    response = await call_next(request)
    if is_new:
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def get_session_id(request: Request) -> str:
    return request.state.session_id


def get_cart_store() -> CartStore:
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore()
    return _cart_store


def get_lock_service() -> LockService:
    global _lock_service
    if _lock_service is None:
        _lock_service = LockService()
    return _lock_service


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
) -> CartService:
    return CartService(store=store, product_service=ProductService(db))


def get_order_service(
    db: Session = Depends(get_db),
    cart_service: CartService = Depends(get_cart_service),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(
        db=db,
        cart_service=cart_service,
        lock_service=lock_service,
        notification_service=notification_service,
    )


def require_access(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Logowanie HTTP Basic + sprawdzenie (rola, trasa) przed logika kontrolera.
    """
    user = None
    if credentials is not None:
        user = UserService(db).authenticate(credentials.username, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    if not is_allowed(user.role.title, request.url.path):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have sufficient permissions to access this page",
        )
    return user
