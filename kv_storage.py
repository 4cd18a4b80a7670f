"""
KV Shell Durable Storage
Journaled, crash-tolerant string -> string mapping behind the Store contract.
Single Responsibility: Storage operations only.
"""

import json
import logging
import os
import threading
from typing import Dict, Iterator, List, Optional, Protocol


logger = logging.getLogger(__name__)

JOURNAL_SUFFIX = ".journal"
TEMP_SUFFIX = ".tmp"


class StoreError(Exception):
    """Raised when durable storage cannot be read or committed."""


class Store(Protocol):
    """Contract the shell core depends on."""

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def size(self) -> int: ...

    def keys(self) -> List[str]: ...


class DurableStore:
    """Manages a snapshot file plus an append-only journal.

    Every put/remove is appended to the journal and fsynced before the
    in-memory view changes, so each call is its own committed transaction.
    """

    def __init__(self, path: str, compact_threshold: int = 1000):
        """Initialize storage manager and recover the last committed state."""
        if compact_threshold < 1:
            raise ValueError("compact_threshold must be at least 1")
        self.path = path
        self.journal_path = path + JOURNAL_SUFFIX
        self.temp_path = path + TEMP_SUFFIX
        self.compact_threshold = compact_threshold
        self.lock = threading.RLock()
        self.data: Dict[str, str] = {}
        self.journal_records = 0
        self._journal = None

        storage_dir = os.path.dirname(os.path.abspath(path))
        os.makedirs(storage_dir, exist_ok=True)
        self._recover()

    # ------------------------------------------------------------------
    # recovery
    # ------------------------------------------------------------------

    def _recover(self):
        """Load snapshot, replay journal, then fold everything into a fresh snapshot."""
        with self.lock:
            self.data = self._load_snapshot()
            replayed = self._replay_journal()
            logger.info(
                "Opened %s: %d entries (%d journal records replayed)",
                self.path, len(self.data), replayed,
            )
            self._compact()

    def _load_snapshot(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Cannot read snapshot {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Snapshot {self.path} is not a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _replay_journal(self) -> int:
        """Apply journal records on top of the snapshot. Returns records applied."""
        if not os.path.exists(self.journal_path):
            return 0
        try:
            with open(self.journal_path, "rb") as f:
                lines = f.readlines()
        except OSError as e:
            raise StoreError(f"Cannot read journal {self.journal_path}: {e}") from e

        applied = 0
        for lineno, raw in enumerate(lines, start=1):
            if not raw.strip():
                continue
            try:
                record = json.loads(raw.decode("utf-8"))
                self._apply(record)
            except (ValueError, KeyError, TypeError) as e:
                # A torn write can only be the last record.
                if lineno == len(lines) and not raw.endswith(b"\n"):
                    logger.warning(
                        "Discarding incomplete journal record at line %d of %s",
                        lineno, self.journal_path,
                    )
                    break
                raise StoreError(
                    f"Corrupt journal record at line {lineno} of {self.journal_path}: {e}"
                ) from e
            applied += 1
        return applied

    def _apply(self, record: dict):
        op = record["op"]
        if op == "put":
            self.data[record["key"]] = record["value"]
        elif op == "remove":
            self.data.pop(record["key"], None)
        else:
            raise ValueError(f"unknown op {op!r}")

    # ------------------------------------------------------------------
    # commit / compaction
    # ------------------------------------------------------------------

    def _open_journal(self):
        if self._journal is None:
            self._journal = open(self.journal_path, "ab")
        return self._journal

    def _commit(self, record: dict):
        """Append one record durably, then apply it to memory."""
        with self.lock:
            try:
                line = (json.dumps(record, ensure_ascii=False) + "\n").encode("utf-8")
            except UnicodeEncodeError as e:
                raise StoreError(f"Cannot encode {record['op']} record: {e}") from e
            try:
                journal = self._open_journal()
                journal.write(line)
                journal.flush()
                os.fsync(journal.fileno())
            except OSError as e:
                raise StoreError(f"Cannot commit to {self.journal_path}: {e}") from e
            self._apply(record)
            self.journal_records += 1
            logger.debug("Committed %s %s", record["op"], record["key"])
            if self.journal_records >= self.compact_threshold:
                # the record is already durable; a failed rewrite is retried next commit
                try:
                    self._compact()
                except StoreError as e:
                    logger.error("Compaction deferred: %s", e)

    def _compact(self):
        """Write the whole mapping as a new snapshot and truncate the journal."""
        with self.lock:
            try:
                with open(self.temp_path, "w", encoding="utf-8") as f:
                    json.dump(self.data, f, indent=2, ensure_ascii=False)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(self.temp_path, self.path)
                if self._journal is not None:
                    self._journal.close()
                    self._journal = None
                with open(self.journal_path, "w", encoding="utf-8") as f:
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                raise StoreError(f"Cannot write snapshot {self.path}: {e}") from e
            self.journal_records = 0
            logger.info("Compacted %s (%d entries)", self.path, len(self.data))

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self._commit({"op": "put", "key": key, "value": value})

    def remove(self, key: str) -> None:
        with self.lock:
            if key not in self.data:
                return
            self._commit({"op": "remove", "key": key})

    def size(self) -> int:
        with self.lock:
            return len(self.data)

    def keys(self) -> List[str]:
        """Snapshot of keys in insertion order."""
        with self.lock:
            return list(self.data.keys())

    def __contains__(self, key) -> bool:
        with self.lock:
            return key in self.data

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def close(self):
        """Release the journal handle. Optional; committed data is already durable."""
        with self.lock:
            if self._journal is not None:
                self._journal.close()
                self._journal = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def get_storage_info(self) -> Dict[str, object]:
        """Get information about stored data."""
        with self.lock:
            info = {
                "path": self.path,
                "entries": len(self.data),
                "journal_records": self.journal_records,
                "files": {},
            }
            for file_path in (self.path, self.journal_path):
                if os.path.exists(file_path):
                    info["files"][os.path.basename(file_path)] = {
                        "exists": True,
                        "size_bytes": os.path.getsize(file_path),
                    }
                else:
                    info["files"][os.path.basename(file_path)] = {"exists": False}
            return info


def open_or_create(path: str, compact_threshold: int = 1000) -> DurableStore:
    """Open the store at path, creating it if needed. Safe to call after a crash."""
    return DurableStore(path, compact_threshold=compact_threshold)
