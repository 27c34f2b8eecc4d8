"""Bounded, cached package search and selection management."""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from initializr.core.errors import SelectionRejected, UpstreamUnavailable
from initializr.packages.searchers import PackageSearcher
from initializr.schemas.packages import SearchRecord

log = logging.getLogger(__name__)

MAX_RESULTS = 10
MAX_SELECTION = 20


@dataclass
class SearchOutcome:
    query: str
    provider: str
    results: List[SearchRecord] = field(default_factory=list)
    cache_hit: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def advisory(message: str) -> SearchRecord:
    return SearchRecord(path="", synopsis=message, advisory=True)


class PackageSearchAdapter:
    """Wraps a PackageSearcher with limits, a timeout and a TTL cache."""

    def __init__(
        self,
        searcher: PackageSearcher,
        timeout: float = 5.0,
        cache_ttl: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.searcher = searcher
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self.clock = clock
        self._cache: Dict[Tuple[str, str, int], Tuple[float, List[SearchRecord]]] = {}

    @property
    def provider(self) -> str:
        return getattr(self.searcher, "name", type(self.searcher).__name__)

    def _cached(self, key: Tuple[str, str, int]) -> Optional[List[SearchRecord]]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        stored_at, records = entry
        if self.clock() - stored_at > self.cache_ttl:
            del self._cache[key]
            return None
        return list(records)

    def _prune(self) -> None:
        now = self.clock()
        expired = [key for key, (stored_at, _) in self._cache.items() if now - stored_at > self.cache_ttl]
        for key in expired:
            del self._cache[key]

    async def search(self, query: str, limit: int = MAX_RESULTS, use_cache: bool = True) -> SearchOutcome:
        """Search upstream; never raises for upstream trouble.

        An empty query or non-positive limit returns no results without calling
        upstream. Timeouts and upstream failures return a single advisory
        record and are not cached.
        """
        query = query.strip()
        outcome = SearchOutcome(query=query, provider=self.provider)
        limit = min(limit, MAX_RESULTS)
        if not query or limit <= 0:
            return outcome

        key = (self.provider, query.lower(), limit)
        if use_cache:
            cached = self._cached(key)
            if cached is not None:
                outcome.results = cached
                outcome.cache_hit = True
                return outcome

        try:
            records = await asyncio.wait_for(self.searcher.search(query, limit), timeout=self.timeout)
        except asyncio.TimeoutError:
            log.warning("Package search for %r timed out after %ss", query, self.timeout)
            outcome.error = f"{self.provider} did not answer within {self.timeout:g} seconds"
            outcome.results = [advisory("Package search timed out. Try again in a moment.")]
            return outcome
        except UpstreamUnavailable as e:
            outcome.error = str(e)
            outcome.results = [advisory("Package search is unavailable right now.")]
            return outcome

        outcome.results = list(records[:limit])
        self._prune()
        self._cache[key] = (self.clock(), list(outcome.results))
        return outcome

    def add(self, selection: Sequence[str], package_path: str) -> List[SearchRecord]:
        """Append ``package_path`` to the selection and return the new selection.

        Raises SelectionRejected for an empty path, a duplicate or a selection
        that is already full.
        """
        path = package_path.strip()
        current = [item.strip() for item in selection if item.strip()]
        if not path:
            raise SelectionRejected("Package path cannot be empty.")
        if path in current:
            raise SelectionRejected(f"{path} is already selected.")
        if len(current) >= MAX_SELECTION:
            raise SelectionRejected(f"At most {MAX_SELECTION} packages can be selected.")
        return [SearchRecord(path=item) for item in current + [path]]
