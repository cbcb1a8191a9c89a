from sqlalchemy import select

from shop.data.models.category import CategoryModel
from shop.repos.base_repo import BaseRepo


class CategoryRepo(BaseRepo[CategoryModel]):
    model = CategoryModel

    def get_by_url(self, url: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.url == url)
        ).scalar_one_or_none()
