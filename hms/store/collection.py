import json
import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar
from pydantic import TypeAdapter
from hms.core.base import Entity, gen_id
from hms.core.exceptions import NotFound, ValidationFailed

if TYPE_CHECKING:
    from hms.store.entity_store import EntityStore

log = logging.getLogger("store.collection")

T = TypeVar("T", bound=Entity)


@lru_cache(maxsize=None)
def list_adapter(model: type[Entity]) -> TypeAdapter:
    return TypeAdapter(list[model])


class StoredValue:
    """A piece of store state mirrored to one storage key.

    Subclasses keep their state in ``_items`` and must replace it (never mutate
    it in place) through ``_replace`` so the owning store can persist or roll back.
    """

    name: str
    _items: Any

    def __init__(self, store: "EntityStore", name: str):
        self._store = store
        self.name = name

    @property
    def key(self) -> str:
        return self._store.key_for(self.name)

    def serialize(self) -> str:
        raise NotImplementedError

    def persist(self) -> None:
        self._store.storage.set(self.key, self.serialize())

    def _restore(self, snapshot: Any) -> None:
        self._items = snapshot

    def _replace(self, new_items: Any) -> None:
        previous = self._items
        self._items = new_items
        self._store._changed(self, previous)


class Collection(StoredValue, Generic[T]):
    """Ordered list of entities of one type with add / edit / delete by id.

    Items are copied on the way in and on the way out, so callers can never
    mutate stored state behind the store's back.
    """

    def __init__(self, store: "EntityStore", name: str, model: type[T], items: list[T]):
        super().__init__(store, name)
        self.model = model
        self.adapter = list_adapter(model)
        self._items: list[T] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def _index(self, item_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _new_id(self) -> str:
        while True:
            candidate = gen_id(self.model.id_prefix)
            if self._index(candidate) is None:
                return candidate

    def all(self) -> list[T]:
        return [item.model_copy(deep=True) for item in self._items]

    def where(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item.model_copy(deep=True) for item in self._items if predicate(item)]

    def count(self, predicate: Callable[[T], bool]) -> int:
        return sum(1 for item in self._items if predicate(item))

    def get(self, item_id: str) -> T | None:
        idx = self._index(item_id)
        if idx is None:
            return None
        return self._items[idx].model_copy(deep=True)

    def require(self, item_id: str) -> T:
        obj = self.get(item_id)
        if obj is None:
            raise NotFound(self.model.__name__, item_id)
        return obj

    def add(self, item: T) -> T:
        obj = item.model_copy(deep=True)
        if not obj.id:
            obj.id = self._new_id()
        elif self._index(obj.id) is not None:
            raise ValidationFailed(f"{self.model.__name__} id {obj.id} already exists")
        self._replace(self._items + [obj])
        log.debug(f"{self.name}: added {obj.id}")
        return obj.model_copy(deep=True)

    def edit(self, item: T) -> T:
        idx = self._index(item.id)
        if idx is None:
            raise NotFound(self.model.__name__, item.id)
        obj = item.model_copy(deep=True)
        new_items = list(self._items)
        new_items[idx] = obj
        self._replace(new_items)
        log.debug(f"{self.name}: edited {obj.id}")
        return obj.model_copy(deep=True)

    def delete(self, item_id: str) -> T:
        idx = self._index(item_id)
        if idx is None:
            raise NotFound(self.model.__name__, item_id)
        removed = self._items[idx]
        self._replace(self._items[:idx] + self._items[idx + 1:])
        log.debug(f"{self.name}: deleted {item_id}")
        return removed.model_copy(deep=True)

    def remove_where(self, predicate: Callable[[T], bool]) -> list[T]:
        keep = [item for item in self._items if not predicate(item)]
        removed = [item for item in self._items if predicate(item)]
        if removed:
            self._replace(keep)
            log.debug(f"{self.name}: removed {len(removed)} item(s)")
        return [item.model_copy(deep=True) for item in removed]

    def serialize(self) -> str:
        return json.dumps([item.model_dump(mode="json") for item in self._items])


class SlotTemplates(StoredValue):
    """Per-doctor ordered list of bookable slot labels, keyed by doctor id."""

    adapter = TypeAdapter(dict[str, list[str]])

    def __init__(self, store: "EntityStore", name: str, templates: dict[str, list[str]]):
        super().__init__(store, name)
        self._items: dict[str, list[str]] = {k: list(v) for k, v in templates.items()}

    def get(self, doctor_id: str) -> list[str]:
        return list(self._items.get(doctor_id, []))

    def all(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._items.items()}

    def set(self, doctor_id: str, labels: list[str]) -> list[str]:
        cleaned = [label.strip() for label in labels]
        if any(not label for label in cleaned):
            raise ValidationFailed("Slot labels must not be blank.")
        if len(set(cleaned)) != len(cleaned):
            raise ValidationFailed("Slot labels must be unique.")
        new_items = dict(self._items)
        new_items[doctor_id] = cleaned
        self._replace(new_items)
        return list(cleaned)

    def remove(self, doctor_id: str) -> None:
        if doctor_id not in self._items:
            return
        new_items = dict(self._items)
        del new_items[doctor_id]
        self._replace(new_items)

    def serialize(self) -> str:
        return json.dumps(self._items)
