"""Request-scoped accessors for the shared state built at startup."""
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from initializr.generators.templates import TemplateRegistry
from initializr.packages import PackageSearchAdapter
from initializr.schemas.options import OptionCatalog
from initializr.stats import StatsSink

WEB_DIR = Path(__file__).resolve().parent.parent / "web"

templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))


def get_catalog(request: Request) -> OptionCatalog:
    return request.app.state.catalog


def get_registry(request: Request) -> TemplateRegistry:
    return request.app.state.registry


def get_go_search(request: Request) -> PackageSearchAdapter:
    return request.app.state.go_search


def get_npm_search(request: Request) -> PackageSearchAdapter:
    return request.app.state.npm_search


def get_stats(request: Request) -> StatsSink:
    return request.app.state.stats
