from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from shop.data.models.user import UserModel
from shop.domain.enums import RoleName
from shop.domain.errors import NotFoundError, ValidationError
from shop.repos.user_repo import UserRepo
from shop.services.role_service import RoleService
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def require_text(**fields: str | None) -> None:
    blank = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if blank:
        raise ValidationError(f"Required fields are blank: {', '.join(blank)}")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.roles = RoleService(db)

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError(f"Can't find user with id {user_id}")
        return user

    def build_client(self, name: str, email: str, phone: str) -> UserModel:
        """Nowy klient z domyslna rola, jeszcze nie zapisany."""
        require_text(name=name, email=email, phone=phone)
        return UserModel(
            name=name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            role=self.roles.get_default(),
        )

    def get_or_create_client(self, name: str, email: str, phone: str) -> UserModel:
        require_text(name=name, email=email, phone=phone)
        existing = self.repo.find_client(name.strip(), email.strip(), phone.strip())
        if existing:
            logger.info(f"Reusing client {existing.id} for {email.strip()}")
            return existing
        return self.build_client(name, email, phone)

    def create_staff(self, name: str, email: str, phone: str, username: str, password: str, role: RoleName) -> UserModel:
        require_text(name=name, email=email, phone=phone, username=username, password=password)
        if self.repo.get_by_username(username):
            raise ValidationError(f"Username {username} is taken")

        user = UserModel(
            name=name,
            email=email,
            phone=phone,
            role=self.roles.get_or_create(role),
            username=username,
            password=generate_password_hash(password),
        )
        created = self.repo.create_user(user)
        logger.info(f"Created {role.value} account {username}")
        return created

    def authenticate(self, username: str, password: str) -> UserModel | None:
        if not username or not password:
            return None
        user = self.repo.get_by_username(username)
        if user is None or not user.password:
            return None
        if not check_password_hash(user.password, password):
            return None
        return user
