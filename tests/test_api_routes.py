"""Tests for the HTTP surface."""
import asyncio
import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from initializr.api.routes_generate import ArchiveStream, _record
from initializr.core.validation import validate_submission
from initializr.generators.plan import build_plan
from initializr.generators.templates import TemplateRegistry
from initializr.main import create_app
from initializr.schemas.packages import SearchRecord
from initializr.stats import MemoryStatsSink

BACKEND_FORM = {
    "projectName": "svc",
    "goVersion": "1.23",
    "httpPackage": "gin",
    "databases": ["postgres"],
    "driver_postgres": "gorm",
    "features": ["gitignore", "docker"],
}


class StaticSearcher:
    name = "static"

    async def search(self, query, limit):
        return [SearchRecord(path=f"github.com/acme/{query}", synopsis="A test package", version="v1.0.0")]


@pytest.fixture
def client():
    app = create_app(searcher=StaticSearcher(), stats_sink=MemoryStatsSink())
    with TestClient(app) as test_client:
        yield test_client


class TestPages:
    def test_landing_page(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "go-ctl initializr" in response.text

    def test_generator_form_lists_catalog_options(self, client):
        response = client.get("/generator")
        assert response.status_code == 200
        assert 'name="driver_postgres"' in response.text
        assert 'value="net-http"' in response.text

    def test_static_assets(self, client):
        assert client.get("/static/style.css").status_code == 200


class TestGenerate:
    def test_generate_streams_zip(self, client):
        response = client.post("/generate", data=BACKEND_FORM)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["content-disposition"] == 'attachment; filename="svc.zip"'
        assert response.headers["x-generation-warnings"] == "0"

        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            names = archive.namelist()
        assert "internal/storage/gorm/gorm.go" in names
        assert "docker-compose.yml" in names
        assert names == sorted(names)

    def test_generate_counts_generation_and_download(self, client):
        client.post("/generate", data=BACKEND_FORM)
        stats = client.get("/stats").json()
        assert stats == {"total_generations": 1, "total_downloads": 1}

    def test_empty_project_name_is_bad_request(self, client):
        response = client.post("/generate", data={**BACKEND_FORM, "projectName": "  "})
        assert response.status_code == 400
        assert client.get("/stats").json()["total_generations"] == 0

    def test_missing_template_is_server_error_without_archive(self, client):
        sources = client.app.state.registry.sources
        client.app.state.registry = TemplateRegistry({
            key: source for key, source in sources.items()
            if key != "storage/gorm" and not key.startswith("main/")
        })
        response = client.post("/generate", data=BACKEND_FORM)
        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert not response.content.startswith(b"PK")
        assert client.get("/stats").json()["total_generations"] == 0

    def test_warnings_are_counted_in_header(self, client):
        form = {**BACKEND_FORM, "databases": ["mongodb"], "driver_mongodb": "gorm"}
        form.pop("driver_postgres")
        response = client.post("/generate", data=form)
        assert response.status_code == 200
        assert int(response.headers["x-generation-warnings"]) >= 1


class TestExplore:
    def test_explore_returns_tree_fragment(self, client):
        response = client.post("/explore", data=BACKEND_FORM)
        assert response.status_code == 200
        assert "main.go" in response.text
        assert "internal/storage/gorm/gorm.go" in response.text
        assert "<html" not in response.text

    def test_explore_shows_warnings(self, client):
        response = client.post("/explore", data={**BACKEND_FORM, "httpPackage": "rocket"})
        assert "rocket" in response.text

    def test_file_content(self, client):
        response = client.get("/file-content", params={**BACKEND_FORM, "path": "go.mod"})
        assert response.status_code == 200
        assert '<code class="language-go-module">' in response.text
        assert "module svc" in response.text

    def test_file_content_escapes_html(self, client):
        params = {
            "projectType": "frontend", "frontendProjectName": "web", "frontendFramework": "react",
            "frontendLanguage": "typescript", "frontendBuildTool": "vite", "path": "index.html",
        }
        response = client.get("/file-content", params=params)
        assert response.status_code == 200
        assert "&lt;div id=" in response.text
        assert "<div id=\"root\">" not in response.text

    def test_unknown_file_is_not_found(self, client):
        response = client.get("/file-content", params={**BACKEND_FORM, "path": "nope.txt"})
        assert response.status_code == 404


class TestPackages:
    def test_search_json(self, client):
        response = client.get("/fetch-packages", params={"q": "router"})
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["results"][0]["path"] == "github.com/acme/router"
        assert body["provider"] == "static"

    def test_search_html(self, client):
        response = client.get("/search-packages", params={"q": "router"})
        assert "github.com/acme/router" in response.text
        assert 'hx-post="/add-package"' in response.text

    def test_npm_search_targets_npm_selection(self, client):
        response = client.get("/search-npm-packages", params={"q": "axios"})
        assert 'hx-post="/add-npm-package"' in response.text

    def test_empty_query_json(self, client):
        body = client.get("/search-packages", params={"q": "", "format": "json"}).json()
        assert body["count"] == 0
        assert body["results"] == []

    def test_add_package(self, client):
        response = client.post(
            "/add-package",
            data={"pkgPath": "github.com/acme/router", "customPackages": ["github.com/acme/log"]},
        )
        assert response.status_code == 200
        assert 'name="customPackages" value="github.com/acme/router"' in response.text
        assert 'id="pkg-github-com-acme-router"' in response.text

    def test_add_duplicate_package_is_rejected(self, client):
        response = client.post(
            "/add-package",
            data={"pkgPath": "github.com/acme/log", "customPackages": ["github.com/acme/log"]},
        )
        assert response.status_code == 422
        assert "already selected" in response.text

    def test_add_npm_package(self, client):
        response = client.post("/add-npm-package", data={"pkgPath": "axios"})
        assert 'name="npmPackages" value="axios"' in response.text


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_stats_start_at_zero(self, client):
        assert client.get("/stats").json() == {"total_generations": 0, "total_downloads": 0}


class GoneRequest:
    """Request stand-in whose client has already hung up."""

    async def is_disconnected(self):
        return True


class TestArchiveStream:
    def _plan(self, catalog, registry):
        return build_plan(validate_submission(BACKEND_FORM, catalog).config, registry)

    def test_disconnect_stops_stream_and_skips_download(self, catalog, registry):
        plan = self._plan(catalog, registry)
        stream = ArchiveStream(GoneRequest(), plan)

        async def consume():
            return [chunk async for chunk in stream.chunks()]

        chunks = asyncio.run(consume())
        assert len(chunks) == 1
        assert stream.completed is False

        stats = MemoryStatsSink()
        _record(stats, stream)
        snapshot = stats.read()
        assert snapshot.generations == 1
        assert snapshot.downloads == 0
