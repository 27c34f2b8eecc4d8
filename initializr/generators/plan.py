"""File-plan builder: the deterministic function from config to file blobs."""
import logging

from initializr.generators.backend_gen.generator import generate_backend
from initializr.generators.frontend_gen.generator import generate_frontend
from initializr.generators.layout import plan_layout
from initializr.generators.templates import TemplateRegistry
from initializr.generators.types import FilePlan
from initializr.schemas.project import ProjectConfig

log = logging.getLogger(__name__)


def build_plan(config: ProjectConfig, registry: TemplateRegistry) -> FilePlan:
    """Render the full project for ``config``.

    The result depends only on the config and the registry contents. Raises
    TemplateMissing when a required role cannot be rendered; no partial plan
    is returned in that case.
    """
    layout = plan_layout(config)
    if config.is_frontend:
        plan = generate_frontend(config, registry, layout)
    else:
        plan = generate_backend(config, registry, layout)
    log.info("Built plan with %d files", len(plan), extra={"project": config.project_name, "step": "plan"})
    return plan
