from sqlalchemy.orm import Session

from shop.data.models.role import RoleModel
from shop.domain.enums import DEFAULT_ROLE, RoleName
from shop.repos.role_repo import RoleRepo


class RoleService:
    def __init__(self, db: Session):
        self.repo = RoleRepo(db)

    def get_default(self) -> RoleModel:
        return self.repo.get_or_create(DEFAULT_ROLE)

    def get_or_create(self, title: RoleName) -> RoleModel:
        return self.repo.get_or_create(RoleName(title))
