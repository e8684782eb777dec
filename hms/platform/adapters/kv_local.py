import os
import logging
from hms.platform.ports.kv_storage import KeyValueStoragePort
from hms.core.config import settings
from hms.core.exceptions import StorageUnavailable

log = logging.getLogger("kv.local")

class LocalFileStorage(KeyValueStoragePort):
    """One file per key under ``root``; values are written atomically via a temp file."""

    def __init__(self, root: str | None = None):
        self.root = os.path.abspath(root or settings.LOCAL_STORAGE_ROOT)
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = key.strip("/").replace("..", "").replace("/", "_")
        return os.path.join(self.root, f"{safe}.json")

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = f"{path}.tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError as e:
            raise StorageUnavailable(f"could not write {key}: {e}") from e
        log.debug(f"[LOCAL KV] wrote {path}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
