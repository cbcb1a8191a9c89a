import redis

from shop.utils.retry import redis_retry
from shop.utils.settings import REDIS_URL, CHECKOUT_LOCK_TTL_SECONDS
from shop.utils.logging import get_logger

logger = get_logger(__name__)

#porownaj i usun atomowo, nie da sie wcisnac miedzy GET a DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Blokada checkoutu per sesja, chroni przed podwojnym wyslaniem formularza.
    SET NX EX przy zalozeniu, lua przy zwalnianiu.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(session_id: str) -> str:
        return f"checkout:{session_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, session_id: str, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS) -> bool:
        key = self._key(session_id)
        logger.info(f"Acquire lock {key}")
        #nx - tylko gdy klucz nie istnieje, ex - wygasa sam gdyby proces padl
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, session_id: str, token: str) -> bool:
        key = self._key(session_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
