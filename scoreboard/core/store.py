"""
In-process document store

Collections of JSON-like documents keyed by id, with:
- merge writes and Increment field transforms
- atomic multi-document batches (all operations apply or none do)
- transactions that hold the store lock across read + write
- snapshot listeners notified after every commit touching their collection
- optional JSON snapshot file rewritten after each commit
"""
import copy
import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple


logger = logging.getLogger(__name__)

# Collection names
TODAY = "today"     # DailyEntry documents keyed by alias
POINTS = "points"   # StandingRecord documents keyed by alias
USERS = "users"     # UserProfile mirror keyed by alias
META = "meta"       # singleton documents (quiz link)

Snapshot = Dict[str, Dict[str, Any]]
Listener = Callable[[Snapshot], None]


class Increment:
    """Field transform: add `amount` to the stored value (missing counts as 0)"""

    def __init__(self, amount):
        self.amount = amount

    def __repr__(self):
        return f"Increment({self.amount})"


def _apply_fields(existing: Optional[dict], data: dict, merge: bool) -> dict:
    """Compute the new document for a set() operation"""
    doc = copy.deepcopy(existing) if (merge and existing) else {}
    for field, value in data.items():
        if isinstance(value, Increment):
            current = doc.get(field) or 0
            doc[field] = current + value.amount
        else:
            doc[field] = copy.deepcopy(value)
    return doc


class WriteBatch:
    """
    Buffered writes committed atomically

    Operations are applied in order at commit time; a failure in any of them
    leaves the store untouched.
    """

    def __init__(self, store: "DocumentStore"):
        self._store = store
        self._ops: List[Tuple[str, str, str, Optional[dict], bool]] = []
        self._committed = False

    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> "WriteBatch":
        self._ops.append(("set", collection, doc_id, data, merge))
        return self

    def delete(self, collection: str, doc_id: str) -> "WriteBatch":
        self._ops.append(("delete", collection, doc_id, None, False))
        return self

    def __len__(self) -> int:
        return len(self._ops)

    def commit(self) -> int:
        """Apply all buffered operations. Returns the number of operations."""
        if self._committed:
            raise RuntimeError("Batch already committed")
        self._committed = True
        self._store._commit(self._ops)
        return len(self._ops)


class Transaction(WriteBatch):
    """
    Read + write unit holding the store lock until commit

    Reads see committed data only (buffered writes are not visible).
    """

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        return self._store.get(collection, doc_id)

    def list(self, collection: str) -> Snapshot:
        return self._store.list(collection)


class DocumentStore:
    """Thread-safe collections of documents with atomic batch commits"""

    def __init__(self, data_file: Optional[str] = None):
        self._data: Dict[str, Snapshot] = {}
        self._lock = threading.RLock()
        self._listeners: Dict[str, Dict[int, Listener]] = {}
        self._next_listener_id = 0
        self._data_file = Path(data_file) if data_file else None

        if self._data_file and self._data_file.exists():
            with open(self._data_file, 'r', encoding='utf-8') as f:
                self._data = json.load(f)
            total = sum(len(docs) for docs in self._data.values())
            logger.info(f"Loaded {total} documents from {self._data_file}")

    # ==================== READS ====================

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        """Return a copy of one document, or None"""
        with self._lock:
            doc = self._data.get(collection, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: str) -> Snapshot:
        """Return a copy of every document in a collection, keyed by id"""
        with self._lock:
            return copy.deepcopy(self._data.get(collection, {}))

    # ==================== WRITES ====================

    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        self.batch().set(collection, doc_id, data, merge=merge).commit()

    def delete(self, collection: str, doc_id: str) -> None:
        self.batch().delete(collection, doc_id).commit()

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """
        Hold the store lock for the duration of the block

        Buffered writes commit when the block exits normally and are discarded
        if it raises. Writers on other threads wait until the commit, so data
        read inside the block cannot change before the writes land.
        """
        with self._lock:
            txn = Transaction(self)
            yield txn
            if len(txn):
                touched = self._apply(txn._ops)
                txn._committed = True
                self._notify(touched)

    def _commit(self, ops: list) -> None:
        with self._lock:
            touched = self._apply(ops)
            self._notify(touched)

    def _apply(self, ops: list) -> List[str]:
        """Apply operations to a staged copy, then swap it in. Caller holds the lock."""
        if not ops:
            return []
        touched = sorted({op[1] for op in ops})
        staged = {name: dict(self._data.get(name, {})) for name in touched}

        for kind, collection, doc_id, data, merge in ops:
            if not doc_id:
                raise ValueError(f"Empty document id in {collection}")
            docs = staged[collection]
            if kind == "set":
                docs[doc_id] = _apply_fields(docs.get(doc_id), data, merge)
            else:
                docs.pop(doc_id, None)

        data = {**self._data, **staged}
        self._persist(data)
        self._data = data
        return touched

    def _persist(self, data: Dict[str, Snapshot]) -> None:
        if not self._data_file:
            return
        self._data_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._data_file.with_suffix(self._data_file.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self._data_file)

    # ==================== LISTENERS ====================

    def on_snapshot(self, collection: str, callback: Listener) -> Callable[[], None]:
        """
        Subscribe to a collection

        The callback receives the current snapshot immediately and again after
        every commit that touches the collection. Returns an unsubscribe
        function; after it is called no further snapshots are delivered.

        Callbacks run while the store lock is held, so snapshots arrive in
        commit order. They may read the store but must not wait on another
        thread that writes to it.
        """
        with self._lock:
            listener_id = self._next_listener_id
            self._next_listener_id += 1
            self._listeners.setdefault(collection, {})[listener_id] = callback
            callback(self.list(collection))

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.get(collection, {}).pop(listener_id, None)

        return unsubscribe

    def listener_count(self, collection: str) -> int:
        with self._lock:
            return len(self._listeners.get(collection, {}))

    def _notify(self, collections: List[str]) -> None:
        for collection in collections:
            with self._lock:
                callbacks = list(self._listeners.get(collection, {}).values())
                if not callbacks:
                    continue
                snapshot = self.list(collection)
                for callback in callbacks:
                    try:
                        callback(snapshot)
                    except Exception:
                        logger.exception(f"Snapshot listener on '{collection}' failed")

    # ==================== MAINTENANCE ====================

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {name: len(docs) for name, docs in self._data.items()}
