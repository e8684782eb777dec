import logging
from fastapi import Request
from hms.core.config import settings
from hms.platform.provider_registry import registry
from hms.store.entity_store import EntityStore
from hms.store.seed import default_seed, load_seed_file

log = logging.getLogger("store.provider")

def build_store() -> EntityStore:
    """Create the process-wide store from the configured storage and seed."""
    seed = load_seed_file(settings.SEED_DATA_PATH) if settings.SEED_DATA_PATH else default_seed()
    storage = registry.kv_storage()
    log.info(f"Loading entity store from {type(storage).__name__} (prefix={settings.KV_KEY_PREFIX!r})")
    return EntityStore.load(storage, seed)

def get_store(request: Request) -> EntityStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        # first request before startup ran (e.g. TestClient used without a context manager)
        store = build_store()
        request.app.state.store = store
    return store
