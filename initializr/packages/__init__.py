"""Package registry search behind a uniform record shape."""
from initializr.packages.adapter import MAX_RESULTS, MAX_SELECTION, PackageSearchAdapter, SearchOutcome
from initializr.packages.searchers import (
    ChainedSearcher,
    FallbackSearcher,
    NpmRegistrySearcher,
    PackageSearcher,
    PkgGoDevSearcher,
    create_searcher,
)

__all__ = [
    "MAX_RESULTS",
    "MAX_SELECTION",
    "PackageSearchAdapter",
    "SearchOutcome",
    "PackageSearcher",
    "PkgGoDevSearcher",
    "NpmRegistrySearcher",
    "ChainedSearcher",
    "FallbackSearcher",
    "create_searcher",
]
