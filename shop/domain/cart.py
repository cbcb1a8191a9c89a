# shop/domain/cart.py
import uuid
from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from shop.domain.errors import ValidationError


class CartPosition(BaseModel):
    """
    Pozycja koszyka: produkt, ilosc i cena zamrozona w chwili dodania.
    Model jest frozen, zmiana ilosci tworzy nowa kopie z ta sama cena.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    title: str = ""
    url: str = ""
    article: int | None = None
    number: int = Field(..., ge=1)
    price: Decimal

    @property
    def total(self) -> Decimal:
        return self.price * self.number


class ShoppingCart:
    """
    Koszyk jednej sesji. Rozmiar (suma ilosci) i cena sa liczone
    przyrostowo przy kazdej zmianie, odczyt jest O(1).
    """

    def __init__(self, positions: List[CartPosition] | None = None, token: str | None = None):
        # token koszyka, nowy po kazdym wyczyszczeniu; zamowienie go zapamietuje
        self.token = token or uuid.uuid4().hex
        self._positions: Dict[int, CartPosition] = {}
        self._size = 0
        self._price = Decimal("0.00")
        for position in positions or []:
            self._put(position)

    def _put(self, position: CartPosition) -> None:
        old = self._positions.get(position.product_id)
        if old is not None:
            self._size -= old.number
            self._price -= old.total
        self._positions[position.product_id] = position
        self._size += position.number
        self._price += position.total

    def add(self, product: Any, quantity: int = 1) -> CartPosition:
        if product is None or getattr(product, "id", None) is None:
            raise ValidationError("Product is not identified")
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        existing = self._positions.get(product.id)
        if existing is not None:
            # cena zostaje z pierwszego dodania
            position = existing.model_copy(update={"number": existing.number + quantity})
        else:
            position = CartPosition(
                product_id=product.id,
                title=getattr(product, "title", "") or "",
                url=getattr(product, "url", "") or "",
                article=getattr(product, "article", None),
                number=quantity,
                price=Decimal(str(product.price)),
            )
        self._put(position)
        return position

    def remove(self, product_id: int) -> None:
        position = self._positions.pop(product_id, None)
        if position is None:
            return
        self._size -= position.number
        self._price -= position.total

    def clear(self) -> None:
        self._positions.clear()
        self._size = 0
        self._price = Decimal("0.00")

    def get_size(self) -> int:
        return self._size

    def get_price(self) -> Decimal:
        return self._price

    @property
    def positions(self) -> List[CartPosition]:
        return list(self._positions.values())

    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return len(self._positions)

    def to_json(self) -> str:
        return CartSnapshot(
            token=self.token,
            size=self._size,
            price=self._price,
            positions=self.positions,
        ).model_dump_json()

    def totals(self) -> "CartTotals":
        return CartTotals(size=self._size, price=self._price)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ShoppingCart":
        snapshot = CartSnapshot.model_validate_json(raw)
        # sumy z zapisu, bez ponownego liczenia po pozycjach
        cart = cls(token=snapshot.token)
        cart._positions = {p.product_id: p for p in snapshot.positions}
        cart._size = snapshot.size
        cart._price = snapshot.price
        return cart


class CartTotals(BaseModel):
    """Rozmiar i cena koszyka, trzymane osobno do szybkiego odczytu."""

    size: int = 0
    price: Decimal = Decimal("0.00")


class CartSnapshot(BaseModel):
    """Forma koszyka zapisywana w session store."""

    token: str
    size: int
    price: Decimal
    positions: List[CartPosition] = []
