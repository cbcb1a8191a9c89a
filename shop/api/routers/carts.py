#shop/api/routers/carts.py
from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import RedirectResponse

from shop.api.deps import get_cart_service, get_session_id
from shop.domain.errors import NotFoundError, ValidationError
from shop.domain.schemas import CartOut, ItemIn
from shop.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def _add(svc: CartService, session_id: str, product_id: int, quantity: int):
    try:
        return svc.add_product(session_id, product_id, quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=CartOut)
def view_cart(
    svc: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    return svc.to_view(svc.get_cart(session_id))


@router.post("/add", response_model=CartOut)
def add_item(
    payload: ItemIn,
    svc: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    cart = _add(svc, session_id, payload.id, payload.quantity)
    return svc.to_view(cart)


@router.post("/add_quickly")
def add_item_quickly(
    id: int = Form(..., gt=0),
    url: str = Form("/"),
    svc: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    """Dodaje 1 sztuke i wraca na strone, z ktorej przyszedl formularz."""
    _add(svc, session_id, id, 1)
    # tylko sciezki wewnetrzne, bez open redirect
    target = url if url.startswith("/") and not url.startswith("//") else "/"
    return RedirectResponse(target, status_code=303)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    svc: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    return svc.to_view(svc.remove_product(session_id, product_id))


@router.get("/clear")
def clear_cart(
    svc: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    svc.clear(session_id)
    return RedirectResponse("/cart", status_code=303)
