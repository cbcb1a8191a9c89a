from typing import List

from sqlalchemy.orm import Session

from shop.data.models.category import CategoryModel
from shop.domain.errors import NotFoundError, ValidationError
from shop.repos.category_repo import CategoryRepo


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def get(self, url: str) -> CategoryModel:
        if not url or not url.strip():
            raise ValidationError("No category url")
        category = self.repo.get_by_url(url)
        if category is None:
            raise NotFoundError(f"Can't find category by url {url}")
        return category

    def get_all(self) -> List[CategoryModel]:
        return self.repo.get_all()
