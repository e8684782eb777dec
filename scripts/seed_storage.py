import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hms.core.config import settings
from hms.platform.provider_registry import registry
from hms.store.entity_store import EntityStore
from hms.store.seed import default_seed, load_seed_file

def main():
    """
    Overwrites every collection in the configured storage with seed data.

    Usage: python scripts/seed_storage.py [seed.json]
    """
    path = sys.argv[1] if len(sys.argv) > 1 else settings.SEED_DATA_PATH
    if path:
        print(f"Reading seed collections from {path}...")
        seed = load_seed_file(path)
    else:
        print("Using built-in seed collections...")
        seed = default_seed()

    storage = registry.kv_storage()
    print(f"Writing to {type(storage).__name__} (provider={settings.KV_STORAGE_PROVIDER}, prefix={settings.KV_KEY_PREFIX!r})")
    store = EntityStore.from_seed(storage, seed)
    for value in store.stored_values():
        print(f"  - {value.key}: {len(value.all())} item(s)")
    print("\nSeeding complete.")

if __name__ == "__main__":
    main()
