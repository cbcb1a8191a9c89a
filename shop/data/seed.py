# shop/data/seed.py
import os
from decimal import Decimal

from shop.data.database import SessionLocal
from shop.data.models import CategoryModel, ProductModel
from shop.domain.enums import RoleName, StatusName
from shop.repos.role_repo import RoleRepo
from shop.repos.status_repo import StatusRepo
from shop.services.user_service import UserService
from shop.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CATALOG = {
    ("Coffee beans", "coffee-beans"): [
        ("Arabica Brazil Santos", "arabica-brazil-santos", 1001, "199.99"),
        ("Robusta India Cherry", "robusta-india-cherry", 1002, "149.50"),
    ],
    ("Coffee makers", "coffee-makers"): [
        ("French press 0.6 l", "french-press-06", 2001, "899.00"),
    ],
}


def seed(db=None):
    """Role, statusy, opcjonalny admin z env i demo katalog jesli pusty."""
    own = db is None
    db = db or SessionLocal()
    try:
        for role in RoleName:
            RoleRepo(db).get_or_create(role)
        for status in StatusName:
            StatusRepo(db).get_or_create(status)

        username = os.getenv("ADMIN_USERNAME")
        password = os.getenv("ADMIN_PASSWORD")
        users = UserService(db)
        if username and password and users.repo.get_by_username(username) is None:
            users.create_staff("Admin", os.getenv("ADMIN_EMAIL", "admin@localhost"), "-", username, password, RoleName.ADMIN)

        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return

        for (title, url), products in DEMO_CATALOG.items():
            category = CategoryModel(title=title, url=url)
            db.add(category)
            for p_title, p_url, article, price in products:
                db.add(ProductModel(title=p_title, url=p_url, article=article, price=Decimal(price), category=category))
        db.commit()
        logger.info("Demo catalogue seeded")
    finally:
        if own:
            db.close()
