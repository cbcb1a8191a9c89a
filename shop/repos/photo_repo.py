from sqlalchemy import select

from shop.data.models.photo import PhotoModel
from shop.repos.base_repo import BaseRepo


class PhotoRepo(BaseRepo[PhotoModel]):
    model = PhotoModel

    def get_by_title(self, title: str) -> PhotoModel | None:
        return self.db.execute(
            select(PhotoModel).where(PhotoModel.title == title)
        ).scalars().first()

    def remove_by_title(self, title: str) -> int:
        photos = self.db.execute(
            select(PhotoModel).where(PhotoModel.title == title)
        ).scalars().all()
        for photo in photos:
            self.db.delete(photo)
        self.db.commit()
        return len(photos)
