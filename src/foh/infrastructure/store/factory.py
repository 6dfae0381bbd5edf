from __future__ import annotations

import os
from functools import lru_cache

from foh.application.ports.store import TabularStore
from foh.infrastructure.db.repositories.tabular_store import SqlAlchemyTabularStore
from foh.infrastructure.store.memory_store import InMemoryTabularStore

_BACKENDS = {"sql", "memory"}


def _store_backend() -> str:
    backend = os.getenv("STORE_BACKEND", "sql").lower()
    if backend not in _BACKENDS:
        raise RuntimeError(f"STORE_BACKEND must be one of {sorted(_BACKENDS)}, got {backend!r}")
    return backend


@lru_cache(maxsize=1)
def _memory_store() -> InMemoryTabularStore:
    return InMemoryTabularStore()


def get_tabular_store() -> TabularStore:
    if _store_backend() == "memory":
        return _memory_store()
    return SqlAlchemyTabularStore()
