import logging
from redis import from_url as redis_from_url
from redis.exceptions import RedisError
from hms.core.config import settings
from hms.core.exceptions import StorageUnavailable
from hms.platform.ports.kv_storage import KeyValueStoragePort

log = logging.getLogger("kv.redis")

class RedisStorage(KeyValueStoragePort):
    def __init__(self, url: str | None = None):
        url = url or settings.REDIS_URL
        if not url:
            raise RuntimeError("REDIS_URL not configured")
        self.redis = redis_from_url(url, encoding="utf-8", decode_responses=True)

    def get(self, key: str) -> str | None:
        return self.redis.get(key)

    def set(self, key: str, value: str) -> None:
        try:
            self.redis.set(key, value)
        except RedisError as e:
            raise StorageUnavailable(f"could not write {key}: {e}") from e
        log.debug(f"[REDIS KV] SET key={key}")

    def delete(self, key: str) -> None:
        self.redis.delete(key)
