import logging
from hms.platform.ports.kv_storage import KeyValueStoragePort

log = logging.getLogger("kv.memory")

class InMemoryStorage(KeyValueStoragePort):
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        log.debug(f"[MEMORY KV] set key={key} bytes={len(value)}")

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
