from sqlalchemy import select

from shop.data.models.role import RoleModel
from shop.domain.enums import RoleName
from shop.repos.base_repo import BaseRepo


class RoleRepo(BaseRepo[RoleModel]):
    model = RoleModel

    def get_by_title(self, title: RoleName) -> RoleModel | None:
        return self.db.execute(
            select(RoleModel).where(RoleModel.title == title)
        ).scalar_one_or_none()

    def get_or_create(self, title: RoleName) -> RoleModel:
        role = self.get_by_title(title)
        if role is None:
            role = self.add(RoleModel(title=title, description=title.value.capitalize()))
        return role
