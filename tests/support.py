import fnmatch
from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shop.data.models  # noqa: F401
from shop.data.database import Base
from shop.data.models import CategoryModel, ProductModel
from shop.services.cart_store import CartStore
from shop.services.lock_service import LockService


class FakeRedis:
    """Minimalny redis w pamieci: get/set(nx, ex)/delete/eval skryptu zwalniania locka."""

    def __init__(self):
        self.data = {}
        self.ttl = {}

    def get(self, name):
        return self.data.get(name)

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.data:
            return None
        self.data[name] = value
        if ex is not None:
            self.ttl[name] = ex
        return True

    def delete(self, *names):
        removed = 0
        for name in names:
            if self.data.pop(name, None) is not None:
                removed += 1
            self.ttl.pop(name, None)
        return removed

    def eval(self, script, numkeys, key, token):
        if self.data.get(key) == token:
            return self.delete(key)
        return 0

    def keys(self, pattern="*"):
        return [k for k in self.data if fnmatch.fnmatch(k, pattern)]


class StubNotifier:
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.sent = []

    def send_order_notification(self, order):
        self.sent.append(order.number)
        if self.error is not None:
            raise self.error
        return self.result


def make_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def make_stores(redis_client=None):
    client = redis_client or FakeRedis()
    return client, CartStore(client=client), LockService(client=client)


def add_catalog(db):
    """Dwa produkty z jednej kategorii: id 1 za 50, id 2 za 30."""
    category = CategoryModel(title="Coffee", url="coffee")
    first = ProductModel(title="Espresso", url="espresso", article=101, price=Decimal("50.00"), category=category)
    second = ProductModel(title="Latte", url="latte", article=102, price=Decimal("30.00"), category=category)
    db.add_all([category, first, second])
    db.commit()
    return first, second


def product(product_id, price, title="p"):
    return SimpleNamespace(id=product_id, price=Decimal(str(price)), title=title, url=title, article=product_id)
