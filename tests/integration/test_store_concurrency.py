"""
Integration tests for JsonStore under concurrent callers.
"""
import json
import threading
import time

import pytest

from scribedb.storage import json_store as json_store_module
from scribedb.storage.codec import encode
from scribedb.storage.errors import NotFound


def _run_all(*targets):
    threads = [threading.Thread(target=t) for t in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return threads


@pytest.mark.integration
class TestStoreConcurrency:
    """Locking and atomic publish behaviour."""

    def test_readers_never_see_partial_records(self, json_store):
        """Test that a reader racing a writer always parses a complete version."""
        small = {"Name": "Zoro", "payload": "x"}
        large = {"Name": "Zoro", "payload": "y" * 200_000}
        json_store.write("users", "zoro", small)
        stop = threading.Event()
        seen = []
        errors = []

        def writer():
            try:
                for i in range(200):
                    json_store.write("users", "zoro", large if i % 2 == 0 else small)
            finally:
                stop.set()

        def reader():
            while not stop.is_set():
                try:
                    seen.append(json_store.read("users", "zoro"))
                except Exception as exc:  # anything here is a torn read
                    errors.append(exc)

        _run_all(writer, reader)

        assert errors == []
        assert seen
        assert all(value in (small, large) for value in seen)

    def test_scans_never_see_partial_records(self, json_store):
        """Test that read_all racing writers returns only complete documents."""
        json_store.write("users", "zoro", {"n": 0})
        stop = threading.Event()
        errors = []

        def writer():
            try:
                for i in range(150):
                    json_store.write("users", "zoro", {"n": i, "pad": "z" * (i * 500)})
            finally:
                stop.set()

        def scanner():
            while not stop.is_set():
                for raw in json_store.read_all("users"):
                    try:
                        json.loads(raw)
                    except ValueError as exc:
                        errors.append(exc)

        _run_all(writer, scanner)

        assert errors == []

    def test_same_collection_writers_are_serialized(self, json_store, mocker):
        """Test that writers on one collection never overlap."""
        active = {"now": 0, "max": 0}
        guard = threading.Lock()

        def tracking_encode(value):
            with guard:
                active["now"] += 1
                active["max"] = max(active["max"], active["now"])
            time.sleep(0.005)
            with guard:
                active["now"] -= 1
            return encode(value)

        mocker.patch.object(json_store_module, "encode", side_effect=tracking_encode)

        def make_writer(n):
            return lambda: json_store.write("users", "zoro", {"writer": n, "pad": "p" * 1000})

        _run_all(*[make_writer(n) for n in range(20)])

        assert active["max"] == 1
        final = json_store.read("users", "zoro")
        assert final["writer"] in range(20)
        assert not list((json_store.data_dir / "users").glob("*.tmp"))

    def test_different_collections_do_not_contend(self, json_store, mocker):
        """Test that writes to two collections run side by side."""
        delay = 0.3

        def slow_encode(value):
            time.sleep(delay)
            return encode(value)

        mocker.patch.object(json_store_module, "encode", side_effect=slow_encode)

        started = time.monotonic()
        _run_all(
            lambda: json_store.write("alpha", "a", {"v": 1}),
            lambda: json_store.write("beta", "b", {"v": 2}),
        )
        elapsed = time.monotonic() - started

        assert elapsed < 2 * delay - 0.05
        assert json_store.read("alpha", "a") == {"v": 1}
        assert json_store.read("beta", "b") == {"v": 2}

    def test_same_collection_writes_queue_up(self, json_store, mocker):
        """Test that two writes to one collection take the sum of their time."""
        delay = 0.2

        def slow_encode(value):
            time.sleep(delay)
            return encode(value)

        mocker.patch.object(json_store_module, "encode", side_effect=slow_encode)

        started = time.monotonic()
        _run_all(
            lambda: json_store.write("alpha", "a", {"v": 1}),
            lambda: json_store.write("alpha", "b", {"v": 2}),
        )

        assert time.monotonic() - started >= 2 * delay

    def test_delete_waits_for_in_flight_write(self, json_store, mocker):
        """Test that a delete on a collection runs after the pending write."""
        entered = threading.Event()

        def slow_encode(value):
            entered.set()
            time.sleep(0.2)
            return encode(value)

        mocker.patch.object(json_store_module, "encode", side_effect=slow_encode)

        def deleter():
            entered.wait(timeout=5)
            json_store.delete("users")

        _run_all(lambda: json_store.write("users", "zoro", {"Name": "Zoro"}), deleter)

        with pytest.raises(NotFound):
            json_store.read_all("users")
