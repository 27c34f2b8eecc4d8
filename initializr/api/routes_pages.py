from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from initializr.api.deps import get_catalog, templates
from initializr.packages import MAX_SELECTION
from initializr.schemas.options import OptionCatalog

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/generator", response_class=HTMLResponse)
def generator_form(request: Request, catalog: OptionCatalog = Depends(get_catalog)):
    return templates.TemplateResponse(
        request,
        "generator.html",
        {"catalog": catalog, "max_selection": MAX_SELECTION},
    )
