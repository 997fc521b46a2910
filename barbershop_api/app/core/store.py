"""
JSON file storage for record collections.

Each collection (``customers``, ``services``, ``appointments``) lives in
its own ``<name>.json`` file holding a JSON array of objects.  Every
write replaces the whole file: content goes to a temporary file in the
same directory, is fsynced and then swapped in with ``os.replace``, so a
crash leaves either the previous or the new content on disk.

Writes to one collection are serialised with a per-collection
re-entrant lock.  Callers that need a read-check-write sequence to be
atomic (e.g. the slot conflict check) can hold the same lock via
``RecordStore.locked``.

A process-wide store is obtained with ``get_store`` and provisioned
with ``init_store`` on application start.
"""

import json
import logging
import os
import tempfile
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .config import settings
from .errors import StorageFailure, StorageUnavailable

COLLECTIONS = ("customers", "services", "appointments")

IMMUTABLE_FIELDS = ("id", "created_at")

Record = Dict[str, Any]

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2025-04-20T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_data_dir() -> str:
    """Compute the data directory path.

    If ``settings.data_dir`` is absolute, use it directly.  Otherwise
    resolve it relative to the project root.
    """
    data_dir = settings.data_dir
    if os.path.isabs(data_dir):
        return data_dir
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / data_dir).resolve())


class RecordStore:
    """Durable collections of JSON records keyed by collection name."""

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    @contextmanager
    def locked(self, collection: str) -> Iterator[None]:
        """Hold the write lock of ``collection`` for the duration of the block."""
        with self._locks_guard:
            lock = self._locks.setdefault(collection, threading.RLock())
        with lock:
            yield

    def _read(self, collection: str) -> List[Record]:
        path = self.path_for(collection)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            logger.warning("Collection %s is not provisioned (%s)", collection, path)
            raise StorageUnavailable(f"Collection '{collection}' is not provisioned") from exc
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Collection %s could not be read: %s", collection, exc)
            raise StorageUnavailable(f"Collection '{collection}' could not be read") from exc
        if not isinstance(data, list):
            raise StorageUnavailable(f"Collection '{collection}' is corrupt")
        return data

    def _write(self, collection: str, records: List[Record]) -> None:
        path = self.path_for(collection)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{collection}.", suffix=".tmp", dir=str(self.data_dir)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Failed to write collection %s", collection)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageFailure(f"Failed to write collection '{collection}'") from exc

    def list(self, collection: str) -> List[Record]:
        """Return the full current contents of ``collection``."""
        return self._read(collection)

    def get_by_id(self, collection: str, record_id: Any) -> Optional[Record]:
        """Return the first record whose id equals ``record_id`` (compared as strings)."""
        wanted = str(record_id)
        for record in self._read(collection):
            if str(record.get("id")) == wanted:
                return record
        return None

    def create(self, collection: str, fields: Record) -> Record:
        """Append a new record with a generated id and ``created_at``."""
        with self.locked(collection):
            records = self._read(collection)
            item = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
            item = {"id": str(uuid.uuid4()), **item, "created_at": utc_timestamp()}
            records.append(item)
            self._write(collection, records)
            return item

    def update(self, collection: str, record_id: Any, patch: Record) -> Optional[Record]:
        """Merge ``patch`` onto an existing record.

        Returns the updated record, or ``None`` when no record has the
        given id.  ``id`` and ``created_at`` cannot be changed.
        """
        wanted = str(record_id)
        with self.locked(collection):
            records = self._read(collection)
            for idx, record in enumerate(records):
                if str(record.get("id")) == wanted:
                    changes = {k: v for k, v in patch.items() if k not in IMMUTABLE_FIELDS}
                    records[idx] = {**record, **changes}
                    self._write(collection, records)
                    return records[idx]
            return None

    def remove(self, collection: str, record_id: Any) -> bool:
        """Remove every record with the given id.

        Always reports success; removing an unknown id leaves the file
        untouched.
        """
        wanted = str(record_id)
        with self.locked(collection):
            records = self._read(collection)
            remaining = [r for r in records if str(r.get("id")) != wanted]
            if len(remaining) != len(records):
                self._write(collection, remaining)
        return True

    def replace_all(self, collection: str, records: Iterable[Record]) -> None:
        """Overwrite the whole content of ``collection``."""
        with self.locked(collection):
            self._write(collection, list(records))

    def ensure_collection(self, collection: str) -> bool:
        """Create an empty collection file if missing.

        Returns ``True`` when a file was created.
        """
        with self.locked(collection):
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageFailure(f"Cannot create data directory {self.data_dir}") from exc
            if self.path_for(collection).exists():
                return False
            self._write(collection, [])
            return True


_store: Optional[RecordStore] = None


def get_store() -> RecordStore:
    """Return the process-wide store, building it from settings on first use."""
    global _store
    if _store is None:
        _store = RecordStore(get_data_dir())
    return _store


def set_store(store: Optional[RecordStore]) -> None:
    """Replace the process-wide store (``None`` resets to settings)."""
    global _store
    _store = store


def init_store(store: Optional[RecordStore] = None) -> List[str]:
    """Provision every collection that does not exist yet.

    Returns the names of the collections that were created.
    """
    store = store or get_store()
    created = []
    for name in COLLECTIONS:
        if store.ensure_collection(name):
            logger.info("Created collection %s", store.path_for(name))
            created.append(name)
    return created
