"""OUI -> vendor record cache stores."""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from macvendor.core.models import OuiKey, VendorRecord

logger = logging.getLogger(__name__)


class CacheStore(ABC):
    """Storage seam for resolved vendor records.

    Implementations must be safe for concurrent ``get``/``put`` calls.
    A missing key is reported as ``None``; an empty list is a cached
    record with no data.
    """

    @abstractmethod
    def get(self, key: OuiKey) -> VendorRecord | None: ...

    @abstractmethod
    def put(self, key: OuiKey, record: VendorRecord) -> None: ...

    @abstractmethod
    def items(self) -> Iterator[tuple[OuiKey, VendorRecord]]: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class MemoryCacheStore(CacheStore):
    """In-process dict store guarded by a single lock. Never evicts."""

    def __init__(self) -> None:
        self._records: dict[OuiKey, VendorRecord] = {}
        self._lock = threading.Lock()

    def get(self, key: OuiKey) -> VendorRecord | None:
        with self._lock:
            record = self._records.get(key)
        return list(record) if record is not None else None

    def put(self, key: OuiKey, record: VendorRecord) -> None:
        with self._lock:
            self._records[key] = list(record)

    def items(self) -> Iterator[tuple[OuiKey, VendorRecord]]:
        with self._lock:
            snapshot = [(k, list(v)) for k, v in self._records.items()]
        return iter(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class JsonFileCacheStore(MemoryCacheStore):
    """Memory store that is loaded from and flushed to a JSON file."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, exc)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring cache file %s: expected a JSON object", self.path)
            return
        for key, record in data.items():
            if isinstance(record, list):
                super().put(key, [str(line) for line in record])
        logger.debug("Loaded %d cached records from %s", len(self), self.path)

    def put(self, key: OuiKey, record: VendorRecord) -> None:
        with self._lock:
            self._records[key] = list(record)
            self._dirty = True

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._dirty = True

    def flush(self) -> None:
        """Write the store to disk if anything changed since the last flush."""
        # Snapshot and reset together so a concurrent put re-dirties the store
        with self._lock:
            if not self._dirty:
                return
            data = {k: list(v) for k, v in self._records.items()}
            self._dirty = False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=1, sort_keys=True)
            tmp.replace(self.path)
        except OSError:
            with self._lock:
                self._dirty = True
            raise
        logger.info("Wrote %d cached records to %s", len(data), self.path)
