# shop/api/routers/admin.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from shop.api.deps import require_access
from shop.data.database import get_db
from shop.domain.errors import NotFoundError, ValidationError
from shop.domain.schemas import PhotoOut, ProductIn, ProductOut, ProductUpdate, StaffCreate, UserRead
from shop.services.photo_service import PhotoService
from shop.services.product_service import ProductService
from shop.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_access)])


@router.get("")
def admin_home():
    # panel admina to lista zamowien
    return RedirectResponse("/managers/orders", status_code=303)


@router.post("/products", response_model=ProductOut, status_code=201)
def add_product(payload: ProductIn, db: Session = Depends(get_db)):
    try:
        return ProductService(db).add(payload.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return ProductService(db).update(product_id, payload.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/products/{product_id}", status_code=204)
def remove_product(product_id: int, db: Session = Depends(get_db)):
    try:
        ProductService(db).remove(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/photos", response_model=PhotoOut, status_code=201)
def upload_photo(
    title: str = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    svc = PhotoService(db)
    saved = svc.save_file(file.filename, file.file)
    if saved is None:
        raise HTTPException(status_code=500, detail="Can't save photo file")
    try:
        return svc.add(title, saved)
    except ValidationError as e:
        svc.delete_file(saved)
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/photos/{title}", status_code=204)
def remove_photo(title: str, db: Session = Depends(get_db)):
    svc = PhotoService(db)
    try:
        photo = svc.get(title)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    svc.delete_file(photo.photo_link_short)
    svc.remove(title)


@router.post("/users", response_model=UserRead, status_code=201)
def create_staff(payload: StaffCreate, db: Session = Depends(get_db)):
    try:
        return UserService(db).create_staff(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            username=payload.username,
            password=payload.password,
            role=payload.role,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
