from sqlalchemy import select

from shop.data.models.role import RoleModel
from shop.data.models.user import UserModel
from shop.domain.enums import RoleName
from shop.repos.base_repo import BaseRepo


class UserRepo(BaseRepo[UserModel]):
    model = UserModel

    def get_user(self, user_id: int) -> UserModel | None:
        return self.get(user_id)

    def create_user(self, user: UserModel) -> UserModel:
        return self.add(user)

    def get_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).unique().scalars().first()

    def find_client(self, name: str, email: str, phone: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel)
            .join(UserModel.role)
            .where(
                UserModel.name == name,
                UserModel.email == email,
                UserModel.phone == phone,
                RoleModel.title == RoleName.CLIENT,
            )
            .order_by(UserModel.id)
        ).unique().scalars().first()
