# shop/services/photo_service.py
import os
import shutil
from typing import BinaryIO

from sqlalchemy.orm import Session

from shop.data.models.photo import PhotoModel
from shop.domain.errors import NotFoundError, ValidationError
from shop.repos.photo_repo import PhotoRepo
from shop.utils.settings import PHOTO_DIR
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class PhotoService:
    def __init__(self, db: Session, photo_dir: str = PHOTO_DIR):
        self.repo = PhotoRepo(db)
        self.photo_dir = photo_dir

    def get(self, title: str) -> PhotoModel:
        if not title or not title.strip():
            raise ValidationError("No photo title")
        photo = self.repo.get_by_title(title)
        if photo is None:
            raise NotFoundError(f"Can't find photo by title {title}")
        return photo

    def add(self, title: str, link_short: str, link_long: str = "") -> PhotoModel:
        if not title or not title.strip():
            raise ValidationError("No photo title")
        return self.repo.add(PhotoModel(title=title, photo_link_short=link_short, photo_link_long=link_long))

    def remove(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("No photo title")
        self.repo.remove_by_title(title)

    def _path(self, filename: str) -> str:
        name = os.path.basename(filename or "")
        if not name:
            raise ValidationError("No file name")
        return os.path.join(self.photo_dir, name)

    def save_file(self, filename: str, stream: BinaryIO) -> str | None:
        """Zapisuje plik w katalogu zdjec, zwraca nazwe albo None przy bledzie IO."""
        path = self._path(filename)
        try:
            os.makedirs(self.photo_dir, exist_ok=True)
            with open(path, "wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            logger.error(f"Failed to save photo {path}: {e}")
            return None
        logger.info(f"Saved photo {path}")
        return os.path.basename(path)

    def delete_file(self, filename: str) -> bool:
        if not filename or not filename.strip():
            return False
        path = self._path(filename)
        if not os.path.isfile(path):
            return False
        try:
            os.remove(path)
        except OSError as e:
            logger.error(f"Failed to delete photo {path}: {e}")
            return False
        return True
