from __future__ import annotations
from datetime import datetime
from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from initializr.db.session import Base

STATS_ROW_ID = 1


class GenerationStats(Base):
    """Single-row table holding the global generation and download counters."""
    __tablename__ = "stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=STATS_ROW_ID)
    total_generations: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_downloads: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
