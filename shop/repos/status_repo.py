from sqlalchemy import select

from shop.data.models.status import StatusModel
from shop.domain.enums import StatusName
from shop.repos.base_repo import BaseRepo


class StatusRepo(BaseRepo[StatusModel]):
    model = StatusModel

    def get_by_title(self, title: StatusName) -> StatusModel | None:
        return self.db.execute(
            select(StatusModel).where(StatusModel.title == title)
        ).scalar_one_or_none()

    def get_or_create(self, title: StatusName) -> StatusModel:
        status = self.get_by_title(title)
        if status is None:
            status = self.add(StatusModel(title=title, description=title.value.capitalize()))
        return status
