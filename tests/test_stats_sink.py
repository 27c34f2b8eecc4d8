"""Tests for the generation and download counters."""
import tempfile
import threading
from pathlib import Path

from sqlalchemy import inspect

from initializr.stats import MemoryStatsSink, SqlStatsSink, StatsSnapshot, create_stats_sink


def test_memory_sink_counts():
    sink = MemoryStatsSink()
    sink.record_generation()
    sink.record_generation()
    sink.record_download()
    assert sink.read() == StatsSnapshot(generations=2, downloads=1)


def test_memory_url_gives_memory_sink():
    assert isinstance(create_stats_sink("memory"), MemoryStatsSink)
    assert isinstance(create_stats_sink(""), MemoryStatsSink)


def test_sql_sink_migrates_and_persists():
    """Counters survive re-creating the sink on the same database file."""
    with tempfile.TemporaryDirectory() as temp_dir:
        url = f"sqlite:///{Path(temp_dir) / 'nested' / 'analytics.db'}"

        sink = create_stats_sink(url)
        assert isinstance(sink, SqlStatsSink)
        assert "stats" in inspect(sink.engine).get_table_names()
        assert sink.read() == StatsSnapshot()

        sink.record_generation()
        sink.record_download()
        sink.record_download()
        sink.close()

        reopened = create_stats_sink(url)
        assert reopened.read() == StatsSnapshot(generations=1, downloads=2)
        reopened.close()


def test_sql_sink_serialises_concurrent_writes():
    with tempfile.TemporaryDirectory() as temp_dir:
        sink = create_stats_sink(f"sqlite:///{Path(temp_dir) / 'analytics.db'}")

        def work():
            for _ in range(10):
                sink.record_generation()

        threads = [threading.Thread(target=work) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert sink.read().generations == 40
        sink.close()


def test_sql_sink_swallows_database_errors():
    with tempfile.TemporaryDirectory() as temp_dir:
        sink = create_stats_sink(f"sqlite:///{Path(temp_dir) / 'analytics.db'}")
        with sink.engine.begin() as connection:
            connection.exec_driver_sql("DROP TABLE stats")

        sink.record_generation()
        assert sink.read() == StatsSnapshot()
        sink.close()


def test_unusable_database_falls_back_to_memory():
    with tempfile.TemporaryDirectory() as temp_dir:
        blocker = Path(temp_dir) / "not-a-directory"
        blocker.write_text("", encoding="utf-8")
        sink = create_stats_sink(f"sqlite:///{blocker / 'analytics.db'}")
        assert isinstance(sink, MemoryStatsSink)
