# shop/repos/product_repo.py
from typing import List

from sqlalchemy import func, or_, select

from shop.data.models.category import CategoryModel
from shop.data.models.product import ProductModel
from shop.repos.base_repo import BaseRepo


class ProductRepo(BaseRepo[ProductModel]):
    model = ProductModel

    def _available(self):
        return select(ProductModel).where(ProductModel.available.is_(True))

    def get_by_url(self, url: str) -> ProductModel | None:
        return self.db.execute(
            self._available().where(ProductModel.url == url)
        ).unique().scalars().first()

    def get_by_article(self, article: int) -> ProductModel | None:
        return self.db.execute(
            self._available().where(ProductModel.article == article)
        ).unique().scalars().first()

    def get_by_category_url(self, url: str) -> List[ProductModel]:
        return list(
            self.db.execute(
                self._available()
                .join(ProductModel.category)
                .where(CategoryModel.url == url)
                .order_by(ProductModel.id)
            ).unique().scalars().all()
        )

    def get_random(self, size: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                self._available().order_by(func.random()).limit(size)
            ).unique().scalars().all()
        )

    def get_random_by_category(self, size: int, category_id: int, exclude_id: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                self._available()
                .where(ProductModel.category_id == category_id, ProductModel.id != exclude_id)
                .order_by(func.random())
                .limit(size)
            ).unique().scalars().all()
        )

    def find_active_conflicts(self, url: str, article: int, exclude_id: int | None = None) -> List[ProductModel]:
        """Aktywne produkty z tym samym url albo artykulem."""
        query = self._available().where(
            or_(ProductModel.url == url, ProductModel.article == article)
        )
        if exclude_id is not None:
            query = query.where(ProductModel.id != exclude_id)
        return list(self.db.execute(query).unique().scalars().all())
