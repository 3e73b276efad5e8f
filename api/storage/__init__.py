"""
Store backends. `build_store` picks one from STORE_BACKEND at startup.
"""

from __future__ import annotations

from core import config

from .base import Store
from .memory import MemoryStore
from .postgres import PostgresStore


async def build_store() -> Store:
    backend = config.store_backend()
    if backend == "memory":
        seed_file = config.questions_seed_file()
        if seed_file:
            return MemoryStore.from_seed_file(seed_file)
        return MemoryStore()
    if backend == "postgres":
        return await PostgresStore.connect()
    raise RuntimeError(f"Unknown STORE_BACKEND: {backend!r} (expected 'memory' or 'postgres').")


__all__ = ["MemoryStore", "PostgresStore", "Store", "build_store"]
