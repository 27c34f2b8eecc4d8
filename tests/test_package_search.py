"""Tests for package search adapters and upstream clients."""
import asyncio

import httpx
import pytest

from initializr.core.errors import SelectionRejected, UpstreamUnavailable
from initializr.core.config import Settings
from initializr.packages import (
    ChainedSearcher,
    FallbackSearcher,
    NpmRegistrySearcher,
    PackageSearchAdapter,
    PkgGoDevSearcher,
    create_searcher,
)
from initializr.schemas.packages import SearchRecord


class FakeSearcher:
    name = "fake"

    def __init__(self, count=15, delay=0.0, error=None):
        self.count = count
        self.delay = delay
        self.error = error
        self.calls = []

    async def search(self, query, limit):
        self.calls.append((query, limit))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return [SearchRecord(path=f"example.com/{query}/{i}") for i in range(self.count)]


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSearchBounds:
    def test_empty_query_never_calls_upstream(self):
        searcher = FakeSearcher()
        outcome = asyncio.run(PackageSearchAdapter(searcher).search("   "))
        assert outcome.results == []
        assert outcome.success
        assert searcher.calls == []

    def test_limit_is_capped_at_ten(self):
        searcher = FakeSearcher(count=30)
        outcome = asyncio.run(PackageSearchAdapter(searcher).search("gin", limit=50))
        assert len(outcome.results) == 10
        assert searcher.calls == [("gin", 10)]

    def test_smaller_limit_is_respected(self):
        outcome = asyncio.run(PackageSearchAdapter(FakeSearcher()).search("gin", limit=3))
        assert len(outcome.results) == 3

    def test_zero_limit_returns_nothing(self):
        searcher = FakeSearcher()
        outcome = asyncio.run(PackageSearchAdapter(searcher).search("gin", limit=0))
        assert outcome.results == []
        assert searcher.calls == []


class TestUpstreamFailures:
    def test_timeout_returns_single_advisory(self):
        adapter = PackageSearchAdapter(FakeSearcher(delay=1.0), timeout=0.01)
        outcome = asyncio.run(adapter.search("gin"))
        assert len(outcome.results) == 1
        assert outcome.results[0].advisory
        assert not outcome.success

    def test_upstream_error_returns_single_advisory(self):
        adapter = PackageSearchAdapter(FakeSearcher(error=UpstreamUnavailable("boom")))
        outcome = asyncio.run(adapter.search("gin"))
        assert [r.advisory for r in outcome.results] == [True]
        assert outcome.error == "boom"

    def test_failures_are_not_cached(self):
        searcher = FakeSearcher(error=UpstreamUnavailable("boom"))
        adapter = PackageSearchAdapter(searcher)

        async def twice():
            await adapter.search("gin")
            return await adapter.search("gin")

        outcome = asyncio.run(twice())
        assert len(searcher.calls) == 2
        assert not outcome.cache_hit


class TestCache:
    def test_repeat_query_is_served_from_cache(self):
        searcher = FakeSearcher()
        adapter = PackageSearchAdapter(searcher)

        async def twice():
            first = await adapter.search("Gin")
            second = await adapter.search("gin")
            return first, second

        first, second = asyncio.run(twice())
        assert len(searcher.calls) == 1
        assert not first.cache_hit
        assert second.cache_hit
        assert second.results == first.results

    def test_cache_can_be_bypassed(self):
        searcher = FakeSearcher()
        adapter = PackageSearchAdapter(searcher)

        async def twice():
            await adapter.search("gin")
            return await adapter.search("gin", use_cache=False)

        outcome = asyncio.run(twice())
        assert len(searcher.calls) == 2
        assert not outcome.cache_hit

    def test_entries_expire(self):
        searcher = FakeSearcher()
        clock = FakeClock()
        adapter = PackageSearchAdapter(searcher, cache_ttl=600, clock=clock)

        async def run():
            await adapter.search("gin")
            clock.now = 601
            return await adapter.search("gin")

        outcome = asyncio.run(run())
        assert len(searcher.calls) == 2
        assert not outcome.cache_hit


class TestSelection:
    def test_add_appends(self):
        adapter = PackageSearchAdapter(FakeSearcher())
        selection = adapter.add(["github.com/a/b"], "github.com/c/d")
        assert [r.path for r in selection] == ["github.com/a/b", "github.com/c/d"]

    def test_duplicate_is_rejected(self):
        adapter = PackageSearchAdapter(FakeSearcher())
        with pytest.raises(SelectionRejected):
            adapter.add(["github.com/a/b"], "github.com/a/b")

    def test_empty_path_is_rejected(self):
        with pytest.raises(SelectionRejected):
            PackageSearchAdapter(FakeSearcher()).add([], "  ")

    def test_twenty_first_package_is_rejected(self):
        adapter = PackageSearchAdapter(FakeSearcher())
        selection = [f"example.com/p{i}" for i in range(20)]
        with pytest.raises(SelectionRejected):
            adapter.add(selection, "example.com/p20")
        assert len(adapter.add(selection[:19], "example.com/p20")) == 20


class TestSearchers:
    def test_fallback_matches_substring(self):
        results = asyncio.run(FallbackSearcher().search("GIN", 10))
        assert results[0].path == "github.com/gin-gonic/gin"

    def test_pkg_go_dev_parses_results(self):
        def handler(request):
            assert request.url.params["q"] == "router"
            assert request.url.params["m"] == "json"
            return httpx.Response(200, json={"Results": [
                {"Path": "github.com/go-chi/chi/v5", "Synopsis": "router", "Version": "v5.1.0"},
                {"Synopsis": "no path"},
            ]})

        searcher = PkgGoDevSearcher("https://pkg.go.dev/search", transport=httpx.MockTransport(handler))
        results = asyncio.run(searcher.search("router", 10))
        assert [r.path for r in results] == ["github.com/go-chi/chi/v5"]
        assert results[0].version == "v5.1.0"

    def test_npm_parses_results(self):
        def handler(request):
            assert request.url.params["text"] == "axios"
            return httpx.Response(200, json={"objects": [
                {"package": {"name": "axios", "description": "HTTP client", "version": "1.7.7"},
                 "downloads": {"weekly": 1000}},
            ]})

        searcher = NpmRegistrySearcher("https://registry.npmjs.org/-/v1/search",
                                       transport=httpx.MockTransport(handler))
        results = asyncio.run(searcher.search("axios", 5))
        assert results[0].path == "axios"
        assert results[0].downloads_hint == 1000

    def test_http_error_becomes_upstream_unavailable(self):
        searcher = PkgGoDevSearcher(
            "https://pkg.go.dev/search",
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )
        with pytest.raises(UpstreamUnavailable):
            asyncio.run(searcher.search("gin", 10))

    def test_malformed_json_becomes_upstream_unavailable(self):
        searcher = NpmRegistrySearcher(
            "https://registry.npmjs.org/-/v1/search",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
        )
        with pytest.raises(UpstreamUnavailable):
            asyncio.run(searcher.search("gin", 10))

    def test_pkg_go_dev_list_payload_becomes_upstream_unavailable(self):
        searcher = PkgGoDevSearcher(
            "https://pkg.go.dev/search",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[{"Path": "x"}])),
        )
        with pytest.raises(UpstreamUnavailable):
            asyncio.run(searcher.search("gin", 10))

    def test_npm_string_items_become_upstream_unavailable(self):
        searcher = NpmRegistrySearcher(
            "https://registry.npmjs.org/-/v1/search",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"objects": ["react"]})),
        )
        with pytest.raises(UpstreamUnavailable):
            asyncio.run(searcher.search("react", 10))

    def test_unexpected_payload_yields_advisory_through_adapter(self):
        searcher = PkgGoDevSearcher(
            "https://pkg.go.dev/search",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[{"Path": "x"}])),
        )
        outcome = asyncio.run(PackageSearchAdapter(searcher).search("gin"))
        assert [r.advisory for r in outcome.results] == [True]


def _html_page(request):
    return httpx.Response(200, text="<html><body>search</body></html>")


class TestChainedSearcher:
    def test_live_results_win(self):
        chain = ChainedSearcher(FakeSearcher(count=2), FallbackSearcher())
        results = asyncio.run(chain.search("gin", 10))
        assert [r.path for r in results] == ["example.com/gin/0", "example.com/gin/1"]

    def test_non_json_page_answers_from_builtin_list(self):
        live = PkgGoDevSearcher("https://pkg.go.dev/search", transport=httpx.MockTransport(_html_page))
        outcome = asyncio.run(PackageSearchAdapter(ChainedSearcher(live, FallbackSearcher())).search("gin"))
        assert outcome.success
        assert outcome.results[0].path == "github.com/gin-gonic/gin"
        assert not any(r.advisory for r in outcome.results)

    def test_empty_live_results_answer_from_builtin_list(self):
        chain = ChainedSearcher(FakeSearcher(count=0), FallbackSearcher())
        results = asyncio.run(chain.search("echo", 10))
        assert results[0].path == "github.com/labstack/echo/v4"

    def test_slow_live_searcher_answers_from_builtin_list(self):
        chain = ChainedSearcher(FakeSearcher(delay=1.0), FallbackSearcher(), timeout=0.01)
        results = asyncio.run(chain.search("gorm", 10))
        assert results[0].path == "gorm.io/gorm"

    def test_advisory_only_when_both_fail(self):
        chain = ChainedSearcher(FakeSearcher(error=UpstreamUnavailable("down")), FallbackSearcher())
        outcome = asyncio.run(PackageSearchAdapter(chain).search("no-such-package-anywhere"))
        assert [r.advisory for r in outcome.results] == [True]
        assert outcome.error == "down"

    def test_live_providers_are_chained_by_default(self):
        settings = Settings(_env_file=None)
        go = create_searcher("pkg.go.dev", settings)
        npm = create_searcher("npm", settings)
        assert isinstance(go, ChainedSearcher) and go.name == "pkg.go.dev"
        assert isinstance(npm, ChainedSearcher) and npm.fallback.name == "npm-fallback"
