# shop/api/routers/orders.py
from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import RedirectResponse

from shop.api.deps import get_order_service, get_session_id
from shop.data.models.order import OrderModel
from shop.domain.errors import ValidationError
from shop.domain.schemas import OrderOut, OrderPositionOut, UserRead
from shop.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def order_to_out(order: OrderModel, cart_size: int = 0) -> OrderOut:
    return OrderOut(
        id=order.id,
        number=order.number,
        status=order.status.title,
        client=UserRead.model_validate(order.client),
        manager=UserRead.model_validate(order.manager) if order.manager else None,
        sale_positions=[
            OrderPositionOut(
                product_id=p.product_id,
                title=p.product.title if p.product else "",
                number=p.number,
                price=p.price,
                total=p.total,
            )
            for p in order.sale_positions
        ],
        price_of_cart=order.total,
        created_at=order.created_at,
        cart_size=cart_size,
    )


@router.post("/checkout", response_model=OrderOut, status_code=201)
def checkout(
    user_name: str = Form(...),
    user_email: str = Form(...),
    user_phone: str = Form(...),
    svc: OrderService = Depends(get_order_service),
    session_id: str = Depends(get_session_id),
):
    """
    Zamowienie z koszyka sesji.
    Pusty koszyk albo powtorzony submit -> redirect, bez nowego zamowienia.
    """
    try:
        order = svc.checkout(session_id, user_name, user_email, user_phone)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if order is None:
        return RedirectResponse("/", status_code=303)

    return order_to_out(order, cart_size=svc.cart_service.get_size(session_id))


@router.get("/checkout")
def checkout_get():
    return RedirectResponse("/cart", status_code=303)
