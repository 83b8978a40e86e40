"""Tests for ReadWriteLock and concurrent catalog access."""

import threading

from sqlscope.catalog import Column, DataType, Database, ReadWriteLock, Table


class TestReadWriteLock:
    """Tests for ReadWriteLock."""

    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)
        assert not any(thread.is_alive() for thread in threads)

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        writer_in = threading.Event()
        release = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                release.wait(timeout=5)
                events.append("writer done")

        def reader():
            with lock.read():
                events.append("reader")

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        assert writer_in.wait(timeout=5)
        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        reader_thread.join(timeout=0.1)
        assert events == []
        release.set()
        writer_thread.join(timeout=5)
        reader_thread.join(timeout=5)
        assert events == ["writer done", "reader"]

    def test_lock_released_on_exception(self):
        lock = ReadWriteLock()
        try:
            with lock.write():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read():
            pass
        with lock.write():
            pass


class TestConcurrentCatalog:
    """Lookups keep working while the catalog is refreshed."""

    def test_concurrent_inserts_and_lookups(self):
        database = Database("db")
        errors = []

        def refresh(worker):
            try:
                for i in range(50):
                    database.insert_table(f"s{worker}", Table.from_pairs(f"t{i}", [("id", DataType("uuid"))]))
                    database.insert_column(f"s{worker}", f"t{i}", Column("extra", DataType("text")))
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        def lookup():
            try:
                for i in range(200):
                    for _, table in database.find_tables(f"t{i % 50}"):
                        table.ordered_columns()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=refresh, args=(n,)) for n in range(3)]
        threads += [threading.Thread(target=lookup) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        assert sorted(database.schema_names()) == ["s0", "s1", "s2"]
        for worker in range(3):
            schema = database.get_schema(f"s{worker}")
            assert len(schema.table_names()) == 50
            assert schema.get_table("t49").column_names == ["id", "extra"]
