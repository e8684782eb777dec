from typing import Protocol, runtime_checkable

@runtime_checkable
class KeyValueStoragePort(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
