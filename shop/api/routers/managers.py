# shop/api/routers/managers.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from shop.api.deps import require_access
from shop.api.routers.orders import order_to_out
from shop.data.database import get_db
from shop.data.models.user import UserModel
from shop.domain.errors import NotFoundError, TransitionError
from shop.domain.schemas import OrderOut, StatusChangeIn
from shop.services.status_service import StatusService
from shop.repos.order_repo import OrderRepo

router = APIRouter(prefix="/managers", tags=["managers"])


@router.get("", dependencies=[Depends(require_access)])
def managers_home():
    return RedirectResponse("/managers/orders", status_code=303)


def _get_order(db: Session, order_id: int):
    order = OrderRepo(db).get_order(order_id)
    if not order:
        raise NotFoundError(f"Can't find order with id {order_id}")
    return order


@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    db: Session = Depends(get_db),
    user: UserModel = Depends(require_access),
):
    return [order_to_out(o) for o in OrderRepo(db).list_orders()]


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    user: UserModel = Depends(require_access),
):
    try:
        return order_to_out(_get_order(db, order_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/orders/{order_id}/status", response_model=OrderOut)
def change_status(
    order_id: int,
    payload: StatusChangeIn,
    db: Session = Depends(get_db),
    user: UserModel = Depends(require_access),
):
    try:
        order = _get_order(db, order_id)
        updated = StatusService(db).change_order_status(order, payload.status, manager=user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return order_to_out(updated)
