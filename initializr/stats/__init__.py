"""Generation and download counters."""
from initializr.stats.sink import (
    MemoryStatsSink,
    SqlStatsSink,
    StatsSink,
    StatsSnapshot,
    create_stats_sink,
    run_migrations,
)

__all__ = [
    "MemoryStatsSink",
    "SqlStatsSink",
    "StatsSink",
    "StatsSnapshot",
    "create_stats_sink",
    "run_migrations",
]
