import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from initializr.api.deps import WEB_DIR
from initializr.api.routes import router as api_router
from initializr.catalog import load_catalog
from initializr.core.config import Settings, settings as default_settings
from initializr.core.errors import CatalogUnavailable
from initializr.core.logging import configure_logging
from initializr.generators.templates import TemplateRegistry
from initializr.packages import PackageSearchAdapter, PackageSearcher, create_searcher
from initializr.stats import StatsSink, create_stats_sink

log = logging.getLogger(__name__)


# Extra time a chained searcher gets to answer from its built-in list
FALLBACK_GRACE = 1.0


def _search_adapters(settings: Settings, searcher: Optional[PackageSearcher]):
    timeout = settings.search_timeout
    if searcher is not None:
        go = npm = searcher
    else:
        go = create_searcher(settings.search_provider, settings)
        timeout += FALLBACK_GRACE
        npm = create_searcher("npm" if settings.search_provider == "pkg.go.dev" else "npm-fallback", settings)
    return (
        PackageSearchAdapter(go, timeout=timeout, cache_ttl=settings.search_cache_ttl),
        PackageSearchAdapter(npm, timeout=timeout, cache_ttl=settings.search_cache_ttl),
    )


def create_app(
    settings: Optional[Settings] = None,
    searcher: Optional[PackageSearcher] = None,
    stats_sink: Optional[StatsSink] = None,
) -> FastAPI:
    """Build the application. ``searcher`` and ``stats_sink`` override the configured backends."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        configure_logging()
        log.info("Starting initializr...", extra={"step": "startup"})
        try:
            app.state.catalog = load_catalog(settings.catalog_path)
        except CatalogUnavailable as e:
            log.error("Option catalog unavailable: %s", e, extra={"step": "startup"})
            raise
        app.state.registry = TemplateRegistry.default()
        app.state.go_search, app.state.npm_search = _search_adapters(settings, searcher)
        app.state.stats = stats_sink if stats_sink is not None else create_stats_sink(settings.stats_database_url)
        log.info(
            "Initializr ready, package search via %s", app.state.go_search.provider,
            extra={"step": "startup"},
        )
        yield
        log.info("Shutting down initializr...", extra={"step": "shutdown"})
        close = getattr(app.state.stats, "close", None)
        if close is not None:
            close()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.mount("/static", StaticFiles(directory=str(WEB_DIR / "static")), name="static")
    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("initializr.main:app", host=default_settings.api_host, port=default_settings.api_port)
