"""
Tests for the document store: merges, batches, transactions, listeners
"""
import json
import threading

import pytest

from scoreboard.core.store import DocumentStore, Increment


def test_set_overwrites_without_merge(store):
    store.set("points", "amy", {"points": 3, "lasts": 1})
    store.set("points", "amy", {"points": 5})
    assert store.get("points", "amy") == {"points": 5}


def test_merge_keeps_other_fields(store):
    store.set("points", "amy", {"points": 3, "lasts": 1})
    store.set("points", "amy", {"points": 5}, merge=True)
    assert store.get("points", "amy") == {"points": 5, "lasts": 1}


def test_increment(store):
    store.set("points", "amy", {"points": Increment(4)}, merge=True)
    store.set("points", "amy", {"points": Increment(-1), "firsts": Increment(1)}, merge=True)
    assert store.get("points", "amy") == {"points": 3, "firsts": 1}


def test_reads_are_copies(store):
    store.set("points", "amy", {"points": 3})
    doc = store.get("points", "amy")
    doc["points"] = 99
    assert store.get("points", "amy")["points"] == 3


def test_batch_is_atomic(store):
    """An invalid operation anywhere in the batch applies nothing"""
    store.set("today", "amy", {"ratio": 1.0})
    batch = store.batch()
    batch.set("points", "amy", {"points": 10})
    batch.delete("today", "amy")
    batch.set("points", "", {"points": 1})

    with pytest.raises(ValueError):
        batch.commit()

    assert store.get("points", "amy") is None
    assert store.get("today", "amy") == {"ratio": 1.0}


def test_batch_commit_once(store):
    batch = store.batch().set("points", "amy", {"points": 1})
    batch.commit()
    with pytest.raises(RuntimeError):
        batch.commit()


def test_transaction_discards_on_error(store):
    with pytest.raises(KeyError):
        with store.transaction() as txn:
            txn.set("points", "amy", {"points": 1})
            raise KeyError("abort")
    assert store.get("points", "amy") is None


def test_transaction_blocks_other_writers(store):
    """A write from another thread waits for the transaction to commit"""
    started = threading.Event()

    def writer():
        started.set()
        store.set("today", "late", {"ratio": 0.5})

    with store.transaction() as txn:
        seen = txn.list("today")
        thread = threading.Thread(target=writer)
        thread.start()
        started.wait()
        thread.join(timeout=0.2)
        assert thread.is_alive()
        for doc_id in seen:
            txn.delete("today", doc_id)

    thread.join()
    assert store.list("today") == {"late": {"ratio": 0.5}}


def test_on_snapshot_delivers_and_unsubscribes(store):
    received = []
    unsubscribe = store.on_snapshot("points", received.append)
    assert received == [{}]

    store.set("points", "amy", {"points": 1})
    store.set("today", "amy", {"ratio": 1.0})  # other collection, no delivery
    assert received[-1] == {"amy": {"points": 1}}
    assert len(received) == 2

    unsubscribe()
    store.set("points", "bob", {"points": 2})
    assert len(received) == 2
    assert store.listener_count("points") == 0


def test_initial_snapshot_not_skipped_by_concurrent_write(store):
    """A commit racing the subscription is delivered after the initial snapshot"""
    received = []
    threads = []

    def listener(snapshot):
        received.append(snapshot)
        if len(received) == 1:
            thread = threading.Thread(target=store.set, args=("points", "amy", {"points": 1}))
            thread.start()
            thread.join(timeout=0.2)
            threads.append((thread, thread.is_alive()))

    store.on_snapshot("points", listener)
    thread, waited = threads[0]
    thread.join()

    assert waited, "writer committed before the initial snapshot was delivered"
    assert received == [{}, {"amy": {"points": 1}}]


def test_failing_listener_does_not_block_others(store):
    received = []

    def broken(snapshot):
        if snapshot:
            raise RuntimeError("render failed")

    store.on_snapshot("points", broken)
    store.on_snapshot("points", received.append)
    store.set("points", "amy", {"points": 1})
    assert received[-1] == {"amy": {"points": 1}}


def test_persists_to_file(tmp_path):
    path = tmp_path / "state" / "scoreboard.json"
    store = DocumentStore(str(path))
    store.set("points", "amy", {"points": 7})

    assert json.loads(path.read_text(encoding="utf-8")) == {"points": {"amy": {"points": 7}}}
    assert DocumentStore(str(path)).get("points", "amy") == {"points": 7}
