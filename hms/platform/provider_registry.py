from hms.core.config import settings
from hms.platform.ports.kv_storage import KeyValueStoragePort
from hms.platform.adapters.kv_memory import InMemoryStorage
from hms.platform.adapters.kv_local import LocalFileStorage

class ProviderRegistry:
    _kv_storage: KeyValueStoragePort | None = None

    @classmethod
    def kv_storage(cls) -> KeyValueStoragePort:
        if cls._kv_storage is None:
            prov = (settings.KV_STORAGE_PROVIDER or "local").lower()
            if prov == "sql":
                from hms.platform.adapters.kv_sql import SqlStorage
                cls._kv_storage = SqlStorage(settings.SQL_DSN)
            elif prov == "redis":
                from hms.platform.adapters.kv_redis import RedisStorage
                cls._kv_storage = RedisStorage(settings.REDIS_URL)
            elif prov == "memory":
                cls._kv_storage = InMemoryStorage()
            else:
                cls._kv_storage = LocalFileStorage(settings.LOCAL_STORAGE_ROOT)
        return cls._kv_storage

    @classmethod
    def reset(cls) -> None:
        cls._kv_storage = None

registry = ProviderRegistry()
