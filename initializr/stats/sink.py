"""Best-effort counters: recording never blocks or fails a generation."""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from sqlalchemy import update
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from initializr.core.errors import StatsUnavailable
from initializr.db.models import STATS_ROW_ID, GenerationStats
from initializr.db.session import create_stats_engine, session_factory

log = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "db" / "migrations"


@dataclass(frozen=True)
class StatsSnapshot:
    generations: int = 0
    downloads: int = 0


class StatsSink(Protocol):
    def record_generation(self) -> None:
        ...

    def record_download(self) -> None:
        ...

    def read(self) -> StatsSnapshot:
        ...


class MemoryStatsSink:
    """Process-local counters, used when no database is configured or reachable."""

    def __init__(self):
        self._lock = threading.Lock()
        self._generations = 0
        self._downloads = 0

    def record_generation(self) -> None:
        with self._lock:
            self._generations += 1

    def record_download(self) -> None:
        with self._lock:
            self._downloads += 1

    def read(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(generations=self._generations, downloads=self._downloads)


class SqlStatsSink:
    """Counters persisted in the single-row ``stats`` table.

    Writes are serialised by one lock. Database errors are logged and
    swallowed so that a broken stats store never fails a request.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = session_factory(engine)
        self._lock = threading.Lock()

    def _increment(self, column) -> None:
        with self._lock:
            try:
                with self.Session.begin() as session:
                    result = session.execute(
                        update(GenerationStats)
                        .where(GenerationStats.id == STATS_ROW_ID)
                        .values({column: column + 1, GenerationStats.last_updated: datetime.utcnow()})
                    )
                    if result.rowcount == 0:
                        row = GenerationStats(id=STATS_ROW_ID, total_generations=0, total_downloads=0)
                        setattr(row, column.key, 1)
                        session.add(row)
            except SQLAlchemyError as e:
                log.warning("Failed to record %s: %s", column.key, e, extra={"step": "stats"})

    def record_generation(self) -> None:
        self._increment(GenerationStats.total_generations)

    def record_download(self) -> None:
        self._increment(GenerationStats.total_downloads)

    def read(self) -> StatsSnapshot:
        try:
            with self.Session() as session:
                row = session.get(GenerationStats, STATS_ROW_ID)
        except SQLAlchemyError as e:
            log.warning("Failed to read stats: %s", e, extra={"step": "stats"})
            return StatsSnapshot()
        if row is None:
            return StatsSnapshot()
        return StatsSnapshot(generations=row.total_generations, downloads=row.total_downloads)

    def close(self) -> None:
        self.engine.dispose()


def run_migrations(engine: Engine) -> None:
    """Run Alembic migrations to head on ``engine``.

    Raises StatsUnavailable when the database cannot be reached or migrated.
    """
    log.info("Running stats migrations...", extra={"step": "stats"})
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    try:
        with engine.begin() as connection:
            alembic_cfg.attributes["connection"] = connection
            command.upgrade(alembic_cfg, "head")
    except (SQLAlchemyError, CommandError) as e:
        raise StatsUnavailable(f"stats migration failed: {e}") from e
    log.info("Stats migrations completed", extra={"step": "stats"})


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def create_stats_sink(url: str) -> StatsSink:
    """Open the stats database and migrate it, falling back to memory on failure."""
    if not url or url == "memory":
        return MemoryStatsSink()
    try:
        _ensure_sqlite_dir(url)
        engine = create_stats_engine(url)
        run_migrations(engine)
    except (StatsUnavailable, SQLAlchemyError, OSError) as e:
        log.error("Stats database unavailable, counting in memory: %s", e, extra={"step": "stats"})
        return MemoryStatsSink()
    return SqlStatsSink(engine)
