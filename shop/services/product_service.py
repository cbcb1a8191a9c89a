# shop/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from shop.data.models.product import ProductModel
from shop.domain.errors import NotFoundError, ValidationError
from shop.repos.category_repo import CategoryRepo
from shop.repos.product_repo import ProductRepo
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """
    Katalog: odczyt dla sklepu, zapis dla admina.
    Url i artykul musza byc unikalne wsrod dostepnych produktow.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)

    #query
    def get(self, product_id: int) -> ProductModel:
        product = self.repo.get(product_id)
        if product is None:
            raise NotFoundError(f"Can't find product with id {product_id}")
        return product

    def get_by_url(self, url: str) -> ProductModel:
        if not url or not url.strip():
            raise ValidationError("No product url")
        product = self.repo.get_by_url(url)
        if product is None:
            raise NotFoundError(f"Can't find product by url {url}")
        return product

    def get_by_article(self, article: int) -> ProductModel:
        product = self.repo.get_by_article(article)
        if product is None:
            raise NotFoundError(f"Can't find product by article {article}")
        return product

    def get_by_url_or_article(self, key: str) -> ProductModel:
        #liczba to artykul, reszta to url
        if key.isascii() and key.isdigit():
            return self.get_by_article(int(key))
        return self.get_by_url(key)

    def get_by_category_url(self, url: str) -> List[ProductModel]:
        if not url or not url.strip():
            raise ValidationError("No category url")
        return self.repo.get_by_category_url(url)

    def get_all(self) -> List[ProductModel]:
        return self.repo.get_all()

    def get_random(self, size: int) -> List[ProductModel]:
        return self.repo.get_random(size)

    def get_random_by_category(self, size: int, category_id: int | None, exclude_id: int) -> List[ProductModel]:
        if category_id is None:
            return []
        return self.repo.get_random_by_category(size, category_id, exclude_id)

    #commands
    def _check_unique(self, url: str, article: int, exclude_id: int | None = None) -> None:
        conflicts = self.repo.find_active_conflicts(url, article, exclude_id)
        if conflicts:
            raise ValidationError(
                f"Product with url {url!r} or article {article} already exists"
            )

    def _check_category(self, category_id: int | None) -> None:
        if category_id is not None and self.categories.get(category_id) is None:
            raise NotFoundError(f"Can't find category with id {category_id}")

    def add(self, data: dict) -> ProductModel:
        if not data.get("title", "").strip() or not data.get("url", "").strip():
            raise ValidationError("Product title and url are required")
        if data.get("available", True):
            self._check_unique(data["url"], data["article"])
        self._check_category(data.get("category_id"))

        created = self.repo.add(ProductModel(**data))
        logger.info(f"Product {created.id} ({created.url}) added")
        return created

    def update(self, product_id: int, data: dict) -> ProductModel:
        product = self.get(product_id)
        # None znaczy "bez zmian", kolumny sa NOT NULL
        data = {k: v for k, v in data.items() if v is not None}

        url = data.get("url", product.url)
        article = data.get("article", product.article)
        if data.get("available", product.available):
            self._check_unique(url, article, exclude_id=product.id)
        self._check_category(data.get("category_id"))

        for key, value in data.items():
            setattr(product, key, value)
        self.repo.commit()
        self.repo.db.refresh(product)

        logger.info(f"Product {product.id} updated")
        return product

    def remove(self, product_id: int) -> None:
        product = self.get(product_id)
        # produkt moze wisiec w starych zamowieniach, wiec tylko go wylaczamy
        product.available = False
        self.repo.commit()
        logger.info(f"Product {product_id} marked unavailable")
