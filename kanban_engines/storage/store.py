"""Key-ordered record stores backing the rule and card registries."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Generic, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from kanban_engines.config import runtime_config

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class KeyValueStore(Protocol[RecordT]):
    def get(self, key: str) -> Optional[RecordT]: ...
    def insert(self, key: str, record: RecordT) -> Optional[RecordT]: ...
    def remove(self, key: str) -> Optional[RecordT]: ...
    def values(self) -> List[RecordT]: ...
    def count(self) -> int: ...


class InMemoryKeyValueStore(Generic[RecordT]):
    """Dict-backed store; ``values`` iterates in key order.

    Records are copied on the way in and out, so callers never hold a live
    reference to stored state (same contract as the filesystem store).
    """

    def __init__(self) -> None:
        self._items: Dict[str, RecordT] = {}

    def get(self, key: str) -> Optional[RecordT]:
        record = self._items.get(key)
        return record.model_copy(deep=True) if record is not None else None

    def insert(self, key: str, record: RecordT) -> Optional[RecordT]:
        previous = self._items.get(key)
        self._items[key] = record.model_copy(deep=True)
        return previous

    def remove(self, key: str) -> Optional[RecordT]:
        return self._items.pop(key, None)

    def values(self) -> List[RecordT]:
        return [self._items[k].model_copy(deep=True) for k in sorted(self._items)]

    def count(self) -> int:
        return len(self._items)


class FilesystemKeyValueStore(Generic[RecordT]):
    """Filesystem-backed store (durable across restarts).

    Each store is a single JSON document ``<root>/<name>.json`` mapping key to
    the record's JSON dump. The document is re-read on every call and replaced
    atomically on every write.
    """

    def __init__(self, name: str, model: Type[RecordT], root: Optional[str] = None) -> None:
        dir_path = root or runtime_config.get_store_dir()
        self._root = Path(dir_path or Path(tempfile.gettempdir()) / "kanban_store")
        self._root.mkdir(parents=True, exist_ok=True)
        self._path = self._root / f"{name}.json"
        self._model = model

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, RecordT]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return {key: self._model.model_validate(data) for key, data in raw.items()}

    def _save(self, items: Dict[str, RecordT]) -> None:
        payload = {key: items[key].model_dump(mode="json") for key in sorted(items)}
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{self._path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, self._path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str) -> Optional[RecordT]:
        return self._load().get(key)

    def insert(self, key: str, record: RecordT) -> Optional[RecordT]:
        items = self._load()
        previous = items.get(key)
        items[key] = record
        self._save(items)
        return previous

    def remove(self, key: str) -> Optional[RecordT]:
        items = self._load()
        removed = items.pop(key, None)
        if removed is not None:
            self._save(items)
        return removed

    def values(self) -> List[RecordT]:
        items = self._load()
        return [items[k] for k in sorted(items)]

    def count(self) -> int:
        return len(self._load())


def store_from_env(name: str, model: Type[RecordT]) -> KeyValueStore[RecordT]:
    backend = runtime_config.get_store_backend()
    if backend == "filesystem":
        return FilesystemKeyValueStore(name, model)
    if backend != "memory":
        raise RuntimeError(f"Unsupported KANBAN_STORE_BACKEND={backend}. Use 'memory' or 'filesystem'.")
    return InMemoryKeyValueStore()
