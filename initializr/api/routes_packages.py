import re
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from initializr.api.deps import get_go_search, get_npm_search, templates
from initializr.core.errors import SelectionRejected
from initializr.packages import MAX_RESULTS, PackageSearchAdapter, SearchOutcome
from initializr.schemas.packages import PackageFetchResponse

router = APIRouter()

_ELEMENT_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def _fetch_response(outcome: SearchOutcome) -> PackageFetchResponse:
    return PackageFetchResponse(
        success=outcome.success,
        query=outcome.query,
        provider=outcome.provider,
        count=len(outcome.results),
        results=outcome.results,
        error=outcome.error,
        cache_hit=outcome.cache_hit,
        timestamp=int(time.time()),
    )


async def _search(
    request: Request,
    adapter: PackageSearchAdapter,
    q: str,
    limit: int,
    cache: bool,
    fmt: str,
    add_url: str,
):
    outcome = await adapter.search(q, limit=limit, use_cache=cache)
    if fmt == "json":
        return _fetch_response(outcome)
    return templates.TemplateResponse(
        request,
        "fragments/search_results.html",
        {"outcome": outcome, "add_url": add_url},
    )


def _pick(provider: Optional[str], go: PackageSearchAdapter, npm: PackageSearchAdapter) -> PackageSearchAdapter:
    if provider and provider.startswith("npm"):
        return npm
    return go


@router.get("/search-packages")
async def search_packages(
    request: Request,
    q: str = "",
    format: str = "html",
    limit: int = Query(MAX_RESULTS, ge=0),
    provider: Optional[str] = None,
    cache: bool = True,
    go: PackageSearchAdapter = Depends(get_go_search),
    npm: PackageSearchAdapter = Depends(get_npm_search),
):
    adapter = _pick(provider, go, npm)
    add_url = "/add-npm-package" if adapter is npm else "/add-package"
    return await _search(request, adapter, q, limit, cache, format, add_url)


@router.get("/fetch-packages")
async def fetch_packages(
    request: Request,
    q: str = "",
    format: str = "json",
    limit: int = Query(MAX_RESULTS, ge=0),
    provider: Optional[str] = None,
    cache: bool = True,
    go: PackageSearchAdapter = Depends(get_go_search),
    npm: PackageSearchAdapter = Depends(get_npm_search),
):
    adapter = _pick(provider, go, npm)
    add_url = "/add-npm-package" if adapter is npm else "/add-package"
    return await _search(request, adapter, q, limit, cache, format, add_url)


@router.get("/search-npm-packages")
async def search_npm_packages(
    request: Request,
    q: str = "",
    format: str = "html",
    limit: int = Query(MAX_RESULTS, ge=0),
    cache: bool = True,
    npm: PackageSearchAdapter = Depends(get_npm_search),
):
    return await _search(request, npm, q, limit, cache, format, "/add-npm-package")


def element_id(package_path: str) -> str:
    return "pkg-" + _ELEMENT_ID_UNSAFE.sub("-", package_path)


async def _add(request: Request, adapter: PackageSearchAdapter, field: str) -> HTMLResponse:
    form = await request.form()
    package_path = str(form.get("pkgPath") or "")
    selection = [str(value) for value in form.getlist(field)]
    try:
        adapter.add(selection, package_path)
    except SelectionRejected as e:
        return templates.TemplateResponse(
            request,
            "fragments/selection_error.html",
            {"message": str(e)},
            status_code=422,
        )
    path = package_path.strip()
    return templates.TemplateResponse(
        request,
        "fragments/selected_package.html",
        {"path": path, "element_id": element_id(path), "field": field},
    )


@router.post("/add-package", response_class=HTMLResponse)
async def add_package(request: Request, adapter: PackageSearchAdapter = Depends(get_go_search)):
    return await _add(request, adapter, "customPackages")


@router.post("/add-npm-package", response_class=HTMLResponse)
async def add_npm_package(request: Request, adapter: PackageSearchAdapter = Depends(get_npm_search)):
    return await _add(request, adapter, "npmPackages")
