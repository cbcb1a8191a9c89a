#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shop.data.models.role import RoleModel
from shop.data.models.status import StatusModel
from shop.data.models.user import UserModel
from shop.data.models.photo import PhotoModel
from shop.data.models.category import CategoryModel
from shop.data.models.product import ProductModel
from shop.data.models.sale_position import SalePositionModel
from shop.data.models.order import OrderModel

__all__ = [
    "RoleModel",
    "StatusModel",
    "UserModel",
    "PhotoModel",
    "CategoryModel",
    "ProductModel",
    "SalePositionModel",
    "OrderModel",
]
