import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, StreamingResponse
from starlette.concurrency import iterate_in_threadpool

from initializr.api.deps import get_catalog, get_registry, get_stats, templates
from initializr.core.errors import ClientDisconnected, ConfigInvalid, TemplateMissing
from initializr.core.validation import ValidationResult, validate_submission
from initializr.generators.archive import iter_archive
from initializr.generators.plan import build_plan
from initializr.generators.preview import build_preview, detect_language
from initializr.generators.templates import TemplateRegistry
from initializr.generators.types import FilePlan
from initializr.schemas.options import OptionCatalog
from initializr.stats import StatsSink

log = logging.getLogger(__name__)

router = APIRouter()


def _validate(form, catalog: OptionCatalog) -> ValidationResult:
    try:
        return validate_submission(form, catalog)
    except ConfigInvalid as e:
        raise HTTPException(status_code=400, detail=str(e))


def _plan(result: ValidationResult, registry: TemplateRegistry) -> FilePlan:
    try:
        return build_plan(result.config, registry)
    except TemplateMissing as e:
        log.error("Generation failed: %s", e, extra={"project": result.config.project_name, "step": "plan"})
        raise HTTPException(status_code=500, detail=str(e))


class ArchiveStream:
    """Streams a plan as ZIP bytes and stops when the client goes away."""

    def __init__(self, request: Request, plan: FilePlan):
        self.request = request
        self.plan = plan
        self.completed = False
        self._cancelled = False

    async def chunks(self):
        extra = {"project": self.plan.project_name, "step": "archive"}
        archive = iter_archive(self.plan, is_cancelled=lambda: self._cancelled)
        try:
            async for chunk in iterate_in_threadpool(archive):
                yield chunk
                if await self.request.is_disconnected():
                    self._cancelled = True
        except ClientDisconnected:
            log.info("Download aborted by client", extra=extra)
            return
        self.completed = True


def _record(stats: StatsSink, stream: ArchiveStream) -> None:
    stats.record_generation()
    if stream.completed:
        stats.record_download()


@router.post("/generate")
async def generate(
    request: Request,
    background: BackgroundTasks,
    catalog: OptionCatalog = Depends(get_catalog),
    registry: TemplateRegistry = Depends(get_registry),
    stats: StatsSink = Depends(get_stats),
):
    form = await request.form()
    result = _validate(form, catalog)
    plan = _plan(result, registry)

    stream = ArchiveStream(request, plan)
    background.add_task(_record, stats, stream)
    headers = {
        "Content-Disposition": f'attachment; filename="{plan.project_name}.zip"',
        "Cache-Control": "no-cache",
        "X-Generation-Warnings": str(len(result.warnings)),
    }
    log.info(
        "Generating %d files", len(plan),
        extra={"project": plan.project_name, "step": "generate"},
    )
    return StreamingResponse(
        stream.chunks(),
        media_type="application/zip",
        headers=headers,
        background=background,
    )


@router.post("/explore", response_class=HTMLResponse)
async def explore(request: Request, catalog: OptionCatalog = Depends(get_catalog)):
    form = await request.form()
    result = _validate(form, catalog)
    nodes = build_preview(result.config)
    return templates.TemplateResponse(
        request,
        "fragments/explore.html",
        {"nodes": nodes, "config": result.config, "warnings": result.warnings},
    )


@router.get("/file-content", response_class=HTMLResponse)
def file_content(
    request: Request,
    path: str = Query(..., min_length=1),
    catalog: OptionCatalog = Depends(get_catalog),
    registry: TemplateRegistry = Depends(get_registry),
):
    result = _validate(request.query_params, catalog)
    plan = _plan(result, registry)
    if path not in plan:
        raise HTTPException(status_code=404, detail=f"{path} is not part of this project")
    return templates.TemplateResponse(
        request,
        "fragments/file_content.html",
        {"path": path, "language": detect_language(path), "content": plan.text(path)},
    )
