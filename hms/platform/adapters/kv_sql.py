import logging
from sqlalchemy import String, Text, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, mapped_column
from hms.core.base import Base
from hms.core.db import make_sessionmaker
from hms.core.exceptions import StorageUnavailable
from hms.platform.ports.kv_storage import KeyValueStoragePort

log = logging.getLogger("kv.sql")

class KvEntry(Base):
    __tablename__ = "kv_entry"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text)

class SqlStorage(KeyValueStoragePort):
    def __init__(self, dsn: str | None = None):
        self.SessionLocal = make_sessionmaker(dsn)

    def get(self, key: str) -> str | None:
        with self.SessionLocal() as s:
            res = s.execute(select(KvEntry.value).where(KvEntry.key == key))
            return res.scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        try:
            with self.SessionLocal.begin() as s:
                obj = s.get(KvEntry, key)
                if obj is None:
                    s.add(KvEntry(key=key, value=value))
                else:
                    obj.value = value
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"could not write {key}: {e}") from e
        log.debug(f"[SQL KV] upsert key={key}")

    def delete(self, key: str) -> None:
        with self.SessionLocal.begin() as s:
            obj = s.get(KvEntry, key)
            if obj is not None:
                s.delete(obj)
