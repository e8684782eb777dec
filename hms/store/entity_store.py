"""
In-memory entity store mirrored to a key-value storage.

Every collection lives under its own storage key as a JSON array (slot
templates as a JSON object). The durable copy is only read when the store is
loaded; afterwards memory is authoritative and each mutation is written
through. A failed write rolls the mutation back.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator
from pydantic import ValidationError
from hms.core.config import settings
from hms.core.exceptions import StorageUnavailable
from hms.platform.ports.kv_storage import KeyValueStoragePort
from hms.store.collection import Collection, SlotTemplates, StoredValue, list_adapter
from hms.modules.patients.models import Patient
from hms.modules.doctors.models import Doctor
from hms.modules.nurses.models import Nurse
from hms.modules.appointments.models import Appointment
from hms.modules.waitlist.models import WaitlistEntry
from hms.modules.transfers.models import TransferRequest
from hms.modules.community.models import Post
from hms.modules.notifications.models import Notification

log = logging.getLogger("store")

COLLECTIONS: dict[str, type] = {
    "patients": Patient,
    "doctors": Doctor,
    "nurses": Nurse,
    "appointments": Appointment,
    "waitlist": WaitlistEntry,
    "transfers": TransferRequest,
    "posts": Post,
    "notifications": Notification,
}
SLOT_TEMPLATES = "doctor_slots"


class EntityStore:
    patients: Collection[Patient]
    doctors: Collection[Doctor]
    nurses: Collection[Nurse]
    appointments: Collection[Appointment]
    waitlist: Collection[WaitlistEntry]
    transfers: Collection[TransferRequest]
    posts: Collection[Post]
    notifications: Collection[Notification]
    slot_templates: SlotTemplates

    def __init__(self, storage: KeyValueStoragePort, data: dict[str, Any], key_prefix: str | None = None):
        """Build a store from already validated ``data`` (collection name -> items)."""
        self.storage = storage
        self.key_prefix = settings.KV_KEY_PREFIX if key_prefix is None else key_prefix
        self._tx: dict[str, tuple[StoredValue, Any]] | None = None
        for name, model in COLLECTIONS.items():
            setattr(self, name, Collection(self, name, model, data.get(name, [])))
        self.slot_templates = SlotTemplates(self, SLOT_TEMPLATES, data.get(SLOT_TEMPLATES, {}))

    def key_for(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    def stored_values(self) -> list[StoredValue]:
        return [getattr(self, name) for name in COLLECTIONS] + [self.slot_templates]

    # ---- Loading ----
    @classmethod
    def load(cls, storage: KeyValueStoragePort, seed: dict[str, Any], key_prefix: str | None = None) -> "EntityStore":
        """Read every collection from storage, falling back to ``seed`` when missing or malformed.

        Seeded collections are written back immediately so storage mirrors memory.
        """
        prefix = settings.KV_KEY_PREFIX if key_prefix is None else key_prefix
        data: dict[str, Any] = {}
        reseeded: list[str] = []

        adapters = {name: list_adapter(model) for name, model in COLLECTIONS.items()}
        adapters[SLOT_TEMPLATES] = SlotTemplates.adapter

        for name, adapter in adapters.items():
            key = f"{prefix}{name}"
            try:
                raw = storage.get(key)
            except UnicodeDecodeError:
                log.warning(f"Stored data under {key} is not valid UTF-8; reverting to seed")
                raw = None
            value = None
            if raw is not None:
                try:
                    value = adapter.validate_json(raw)
                except ValidationError as e:
                    log.warning(f"Stored data under {key} is malformed ({e.error_count()} error(s)); reverting to seed")
            if value is None:
                empty: Any = {} if name == SLOT_TEMPLATES else []
                value = adapter.validate_python(seed.get(name, empty))
                reseeded.append(name)
            data[name] = value

        store = cls(storage, data, key_prefix=prefix)
        for value in store.stored_values():
            if value.name in reseeded:
                value.persist()
        if reseeded:
            log.info(f"Seeded collections: {', '.join(reseeded)}")
        return store

    @classmethod
    def from_seed(cls, storage: KeyValueStoragePort, seed: dict[str, Any], key_prefix: str | None = None) -> "EntityStore":
        """Replace whatever storage holds with ``seed``."""
        data: dict[str, Any] = {}
        for name, model in COLLECTIONS.items():
            data[name] = list_adapter(model).validate_python(seed.get(name, []))
        data[SLOT_TEMPLATES] = SlotTemplates.adapter.validate_python(seed.get(SLOT_TEMPLATES, {}))
        store = cls(storage, data, key_prefix=key_prefix)
        for value in store.stored_values():
            value.persist()
        return store

    # ---- Write-through and transactions ----
    def _changed(self, value: StoredValue, previous: Any) -> None:
        if self._tx is not None:
            # keep the state from before the transaction touched this value
            self._tx.setdefault(value.name, (value, previous))
            return
        try:
            value.persist()
        except StorageUnavailable:
            value._restore(previous)
            log.error(f"Write of {value.key} failed; in-memory change rolled back")
            raise

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Group mutations across collections: written together on exit, all restored on failure."""
        if self._tx is not None:
            # nested: join the outer transaction
            yield self
            return
        self._tx = {}
        try:
            yield self
        except BaseException:
            touched, self._tx = self._tx, None
            for value, snapshot in touched.values():
                value._restore(snapshot)
            raise
        touched, self._tx = self._tx, None
        written: list[StoredValue] = []
        try:
            for value, _ in touched.values():
                value.persist()
                written.append(value)
        except StorageUnavailable:
            log.error(f"Transaction write failed after {len(written)} of {len(touched)} key(s); rolling back")
            for value, snapshot in touched.values():
                value._restore(snapshot)
            for value in written:
                try:
                    value.persist()
                except StorageUnavailable:
                    log.exception(f"Could not restore {value.key}; storage and memory now differ")
            raise

    def dump(self) -> dict[str, Any]:
        data: dict[str, Any] = {name: getattr(self, name).adapter.dump_python(getattr(self, name).all(), mode="json") for name in COLLECTIONS}
        data[SLOT_TEMPLATES] = self.slot_templates.all()
        return data
