from decimal import Decimal
from typing import Dict, Any

from shop.domain.cart import ShoppingCart
from shop.services.cart_store import CartStore
from shop.services.product_service import ProductService
from shop.domain.errors import ValidationError
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka, wszystko kluczowane id sesji.
    commands (add, remove, clear) zapisuja koszyk w store
    query (get, size, price) tylko odczyt
    """

    def __init__(self, store: CartStore, product_service: ProductService):
        self.store = store
        self.product_service = product_service

    @staticmethod
    def to_view(cart: ShoppingCart) -> Dict[str, Any]:
        #dict przeksztalcany w jsona
        return {
            "sale_positions": [
                {
                    "product_id": p.product_id,
                    "title": p.title,
                    "url": p.url,
                    "article": p.article,
                    "number": p.number,
                    "price": p.price,
                    "total": p.total,
                }
                for p in cart.positions
            ],
            "price_of_cart": cart.get_price(),
            "cart_size": cart.get_size(),
        }

    #query
    def get_cart(self, session_id: str) -> ShoppingCart:
        return self.store.load(session_id)

    def get_size(self, session_id: str) -> int:
        return self.store.load_totals(session_id).size

    def get_price(self, session_id: str) -> Decimal:
        return self.store.load_totals(session_id).price

    #commands
    def add_product(self, session_id: str, product_id: int, quantity: int = 1) -> ShoppingCart:
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        product = self.product_service.get(product_id)
        if not product.available:
            raise ValidationError(f"Product {product_id} is not available")

        cart = self.store.load(session_id)
        position = cart.add(product, quantity)
        self.store.save(session_id, cart)

        logger.info(
            f"Product {product_id} x{quantity} added to cart of session {session_id}, "
            f"position now x{position.number}, cart size {cart.get_size()}"
        )
        return cart

    def remove_product(self, session_id: str, product_id: int) -> ShoppingCart:
        cart = self.store.load(session_id)
        cart.remove(product_id)
        self.store.save(session_id, cart)

        logger.info(f"Product {product_id} removed from cart of session {session_id}")
        return cart

    def clear(self, session_id: str) -> ShoppingCart:
        self.store.delete(session_id)
        logger.info(f"Cart of session {session_id} cleared")
        return ShoppingCart()
