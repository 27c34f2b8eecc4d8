"""Upstream registry clients.

Each searcher turns a query into SearchRecords and raises UpstreamUnavailable
for any transport or decoding failure. Limits, timeouts and caching are the
adapter's job.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence, Tuple

import httpx

from initializr.core.errors import UpstreamUnavailable
from initializr.schemas.packages import SearchRecord

log = logging.getLogger(__name__)

USER_AGENT = "go-ctl-initializr/0.1"

# Offline result set for Go modules
GO_PACKAGES: Sequence[Tuple[str, str]] = (
    ("github.com/gin-gonic/gin", "Gin is a HTTP web framework written in Go (Golang)"),
    ("github.com/labstack/echo/v4", "High performance, minimalist Go web framework"),
    ("github.com/gofiber/fiber/v2", "Express inspired web framework written in Go"),
    ("github.com/go-chi/chi/v5", "Lightweight, idiomatic and composable router for building HTTP services"),
    ("gorm.io/gorm", "The fantastic ORM library for Golang"),
    ("github.com/jmoiron/sqlx", "General purpose extensions to golang's database/sql"),
    ("go.mongodb.org/mongo-driver", "The MongoDB official Go driver"),
    ("github.com/redis/go-redis/v9", "Redis client for Go"),
    ("github.com/golang-jwt/jwt/v5", "JWT token authentication library for Go"),
    ("github.com/rs/cors", "Go net/http configurable handler to handle CORS requests"),
    ("github.com/rs/zerolog", "Zero Allocation JSON Logger"),
    ("github.com/spf13/viper", "Go configuration with fangs"),
    ("github.com/stretchr/testify", "A toolkit with common assertions and mocks for Go tests"),
    ("entgo.io/ent", "An entity framework for Go"),
    ("github.com/lib/pq", "Pure Go Postgres driver for database/sql"),
    ("github.com/go-sql-driver/mysql", "Go MySQL Driver is a MySQL driver for Go's database/sql package"),
    ("github.com/mattn/go-sqlite3", "sqlite3 driver for go using database/sql"),
    ("google.golang.org/grpc", "The Go implementation of gRPC: A high-performance RPC framework"),
    ("github.com/gorilla/mux", "A powerful HTTP router and URL matcher for building Go web servers"),
    ("github.com/gorilla/websocket", "A fast, well-tested and widely used WebSocket implementation for Go"),
)

# Offline result set for npm packages
NPM_PACKAGES: Sequence[Tuple[str, str]] = (
    ("axios", "Promise based HTTP client for the browser and node.js"),
    ("zod", "TypeScript-first schema declaration and validation library"),
    ("date-fns", "Modern JavaScript date utility library"),
    ("lodash-es", "Lodash exported as ES modules"),
    ("clsx", "Tiny utility for constructing className strings conditionally"),
    ("zustand", "Bear necessities for state management in React"),
    ("@tanstack/react-query", "Powerful asynchronous state management for TS/JS and React"),
    ("react-hook-form", "Performant, flexible and extensible forms library for React"),
    ("vue-router", "The official router for Vue.js"),
    ("pinia", "Intuitive, type safe and flexible Store for Vue"),
    ("@vueuse/core", "Collection of essential Vue Composition Utilities"),
    ("svelte-routing", "A declarative Svelte routing library"),
    ("rxjs", "Reactive Extensions Library for JavaScript"),
    ("dayjs", "2KB immutable date time library alternative to Moment.js"),
    ("uuid", "RFC9562 UUIDs"),
)


class PackageSearcher(Protocol):
    name: str

    async def search(self, query: str, limit: int) -> List[SearchRecord]:
        ...


class FallbackSearcher:
    """Case-insensitive substring match over a built-in package list."""

    def __init__(self, entries: Sequence[Tuple[str, str]] = GO_PACKAGES, name: str = "fallback"):
        self.entries = entries
        self.name = name

    async def search(self, query: str, limit: int) -> List[SearchRecord]:
        needle = query.strip().lower()
        results = []
        for path, synopsis in self.entries:
            if needle in path.lower() or needle in synopsis.lower():
                results.append(SearchRecord(path=path, synopsis=synopsis))
                if len(results) >= limit:
                    break
        return results


class _HttpSearcher:
    name = "http"

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def _get_json(self, params: dict) -> dict:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.base_url, params=params, headers=headers)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPError as e:
            log.warning("%s search failed: %s", self.name, e)
            raise UpstreamUnavailable(f"{self.name} search failed: {e}") from e
        except ValueError as e:
            log.warning("%s returned malformed JSON: %s", self.name, e)
            raise UpstreamUnavailable(f"{self.name} returned malformed JSON") from e

    def _items(self, payload, key: str) -> List[dict]:
        """Return ``payload[key]`` as a list of objects, rejecting any other shape."""
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(f"{self.name} returned an unexpected payload")
        items = payload.get(key) or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise UpstreamUnavailable(f"{self.name} returned an unexpected {key!r} list")
        return items


class PkgGoDevSearcher(_HttpSearcher):
    """Go module search against pkg.go.dev's JSON output."""
    name = "pkg.go.dev"

    async def search(self, query: str, limit: int) -> List[SearchRecord]:
        payload = await self._get_json({"q": query, "m": "json", "limit": str(limit)})
        results = []
        for item in self._items(payload, "Results"):
            path = item.get("Path")
            if not path:
                continue
            results.append(SearchRecord(
                path=path,
                synopsis=item.get("Synopsis") or "",
                version=item.get("Version") or None,
            ))
        return results[:limit]


class NpmRegistrySearcher(_HttpSearcher):
    """npm registry search."""
    name = "npm"

    async def search(self, query: str, limit: int) -> List[SearchRecord]:
        payload = await self._get_json({"text": query, "size": str(limit)})
        results = []
        for item in self._items(payload, "objects"):
            package = item.get("package") or {}
            if not isinstance(package, dict):
                raise UpstreamUnavailable(f"{self.name} returned an unexpected package entry")
            name = package.get("name")
            if not name:
                continue
            downloads = item.get("downloads")
            downloads = downloads.get("weekly") if isinstance(downloads, dict) else None
            results.append(SearchRecord(
                path=name,
                synopsis=package.get("description") or "",
                version=package.get("version") or None,
                downloads_hint=downloads if isinstance(downloads, int) else None,
            ))
        return results[:limit]


class ChainedSearcher:
    """Ask the live registry first and answer from the built-in list when it cannot help.

    The fallback is used when the live searcher fails, exceeds ``timeout`` or
    finds nothing. The live failure propagates only when the fallback has no
    match either.
    """

    def __init__(self, primary: PackageSearcher, fallback: PackageSearcher, timeout: Optional[float] = None):
        self.primary = primary
        self.fallback = fallback
        self.timeout = timeout
        self.name = primary.name

    async def search(self, query: str, limit: int) -> List[SearchRecord]:
        failure: Optional[UpstreamUnavailable] = None
        try:
            results = await asyncio.wait_for(self.primary.search(query, limit), timeout=self.timeout)
        except asyncio.TimeoutError:
            failure = UpstreamUnavailable(f"{self.primary.name} did not answer in time")
            results = []
        except UpstreamUnavailable as e:
            failure = e
            results = []
        if results:
            return results

        log.info("Answering %r from the %s list", query, self.fallback.name)
        results = await self.fallback.search(query, limit)
        if not results and failure is not None:
            raise failure
        return results


def create_searcher(provider: str, settings) -> PackageSearcher:
    """Build the searcher named by ``provider``: "pkg.go.dev", "npm" or "fallback".

    The live providers are chained onto the matching built-in list.
    """
    if provider == "pkg.go.dev":
        return ChainedSearcher(
            PkgGoDevSearcher(settings.pkg_go_dev_url, timeout=settings.search_timeout),
            FallbackSearcher(),
            timeout=settings.search_timeout,
        )
    if provider == "npm":
        return ChainedSearcher(
            NpmRegistrySearcher(settings.npm_registry_url, timeout=settings.search_timeout),
            FallbackSearcher(NPM_PACKAGES, name="npm-fallback"),
            timeout=settings.search_timeout,
        )
    if provider == "npm-fallback":
        return FallbackSearcher(NPM_PACKAGES, name="npm-fallback")
    return FallbackSearcher()
