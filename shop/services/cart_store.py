# shop/services/cart_store.py
import redis

from shop.domain.cart import CartTotals, ShoppingCart
from shop.utils.retry import redis_retry
from shop.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Session store dla koszykow: klucz cart:<session_id> z JSON-em koszyka
    i cart:<session_id>:totals z rozmiarem i cena (badge bez ladowania pozycji).
    TTL odswiezany przy kazdym zapisie.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(session_id: str) -> str:
        return f"cart:{session_id}"

    @staticmethod
    def _totals_key(session_id: str) -> str:
        return f"cart:{session_id}:totals"

    @redis_retry()
    def load(self, session_id: str) -> ShoppingCart:
        raw = self.redis.get(self._key(session_id))
        if raw is None:
            return ShoppingCart()
        return ShoppingCart.from_json(raw)

    @redis_retry()
    def load_totals(self, session_id: str) -> CartTotals:
        raw = self.redis.get(self._totals_key(session_id))
        if raw is None:
            return CartTotals()
        return CartTotals.model_validate_json(raw)

    @redis_retry()
    def save(self, session_id: str, cart: ShoppingCart) -> None:
        if cart.is_empty():
            self.redis.delete(self._key(session_id), self._totals_key(session_id))
            return
        self.redis.set(self._key(session_id), cart.to_json(), ex=self.ttl)
        self.redis.set(self._totals_key(session_id), cart.totals().model_dump_json(), ex=self.ttl)

    @redis_retry()
    def delete(self, session_id: str) -> None:
        logger.debug(f"Drop cart for session {session_id}")
        self.redis.delete(self._key(session_id), self._totals_key(session_id))
