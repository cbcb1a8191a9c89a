# shop/api/routers/catalog.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shop.api.deps import get_cart_service, get_session_id
from shop.data.database import get_db
from shop.domain.errors import NotFoundError, ValidationError
from shop.domain.schemas import (
    CategoryOut,
    CategoryPageOut,
    HomeOut,
    ProductOut,
    ProductPageOut,
    ProductsPageOut,
)
from shop.services.cart_service import CartService
from shop.services.category_service import CategoryService
from shop.services.product_service import ProductService

router = APIRouter(tags=["catalog"])

HOME_PRODUCTS = 12
FEATURED_PRODUCTS = 4


@router.get("/", response_model=HomeOut)
def home(
    db: Session = Depends(get_db),
    cart: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    return HomeOut(
        categories=[CategoryOut.model_validate(c) for c in CategoryService(db).get_all()],
        products=[ProductOut.model_validate(p) for p in ProductService(db).get_random(HOME_PRODUCTS)],
        cart_size=cart.get_size(session_id),
    )


@router.get("/category/{url}", response_model=CategoryPageOut)
def products_in_category(
    url: str,
    db: Session = Depends(get_db),
    cart: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    try:
        category = CategoryService(db).get(url)
        products = ProductService(db).get_by_category_url(url)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CategoryPageOut(
        category=CategoryOut.model_validate(category),
        products=[ProductOut.model_validate(p) for p in products],
        cart_size=cart.get_size(session_id),
    )


@router.get("/product/all", response_model=ProductsPageOut)
def all_products(
    db: Session = Depends(get_db),
    cart: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    products = [p for p in ProductService(db).get_all() if p.available]
    return ProductsPageOut(
        products=[ProductOut.model_validate(p) for p in products],
        cart_size=cart.get_size(session_id),
    )


@router.get("/product/{key}", response_model=ProductPageOut)
def product_page(
    key: str,
    db: Session = Depends(get_db),
    cart: CartService = Depends(get_cart_service),
    session_id: str = Depends(get_session_id),
):
    """Produkt po artykule (liczba) albo po url."""
    svc = ProductService(db)
    try:
        product = svc.get_by_url_or_article(key)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    featured = svc.get_random_by_category(FEATURED_PRODUCTS, product.category_id, product.id)
    return ProductPageOut(
        product=ProductOut.model_validate(product),
        featured_products=[ProductOut.model_validate(p) for p in featured],
        cart_size=cart.get_size(session_id),
    )
