"""Orchestrator for frontend generation."""
import logging
from typing import Callable, Dict, List

from initializr.core.errors import TemplateMissing
from initializr.generators.frontend_gen import render_angular as ng
from initializr.generators.frontend_gen import render_vite as vite
from initializr.generators.frontend_gen.packages import render_package_json
from initializr.generators.templates import TemplateRegistry
from initializr.generators.types import FilePlan, PlannedFile
from initializr.schemas.project import ProjectConfig

log = logging.getLogger(__name__)

Renderer = Callable[[ProjectConfig], str]


def _static(content: Callable[[], str]) -> Renderer:
    return lambda config: content()


VITE_RENDERERS: Dict[str, Renderer] = {
    "package.json": render_package_json,
    "index.html": vite.render_index_html,
    "vite.config": vite.render_vite_config,
    "main": vite.render_main,
    "app": vite.render_app,
    "hello-world": vite.render_hello_world,
    "hello-world-test": vite.render_hello_world_test,
    "gitkeep": _static(lambda: ""),
    "lib-hooks": vite.render_lib_hooks,
    "lib-types": vite.render_lib_types,
    "lib-validations": vite.render_lib_validations,
    "store": vite.render_store,
    "styles": vite.render_styles,
    "frontend-gitignore": _static(vite.render_frontend_gitignore),
    "tsconfig": vite.render_tsconfig,
    "tsconfig.node": _static(vite.render_tsconfig_node),
    "vite-env": vite.render_vite_env,
    "svelte.config": _static(vite.render_svelte_config),
    "eslint": vite.render_eslint,
    "prettier": vite.render_prettierrc,
    "prettierignore": _static(vite.render_prettierignore),
    "tailwind": vite.render_tailwind_config,
    "postcss": _static(vite.render_postcss_config),
    "router": vite.render_router,
}

ANGULAR_RENDERERS: Dict[str, Renderer] = {
    "package.json": render_package_json,
    "angular.json": ng.render_angular_json,
    "tsconfig": _static(ng.render_tsconfig),
    "tsconfig.app": _static(ng.render_tsconfig_app),
    "index.html": ng.render_index_html,
    "main": _static(ng.render_main),
    "styles": ng.render_styles,
    "app": ng.render_app_component,
    "app-template": _static(ng.render_app_template),
    "app-styles": _static(ng.render_app_styles),
    "app-config": _static(ng.render_app_config),
    "app-routes": _static(ng.render_app_routes),
    "hello-world": _static(ng.render_hello_world),
    "frontend-gitignore": _static(vite.render_frontend_gitignore),
    "eslint": _static(ng.render_eslint),
    "prettier": _static(ng.render_prettierrc),
    "tailwind": _static(ng.render_tailwind_config),
}


def generate_frontend(config: ProjectConfig, registry: TemplateRegistry, layout: List[PlannedFile]) -> FilePlan:
    """Render every planned frontend file into a FilePlan."""
    renderers = ANGULAR_RENDERERS if config.frontend.framework.id == "angular" else VITE_RENDERERS
    extra = {"project": config.project_name, "step": "plan"}

    plan = FilePlan(config.project_name)
    for planned in layout:
        if planned.role == "readme":
            content = registry.render(registry.get("readme"), config, role="readme")
        elif planned.role in renderers:
            content = renderers[planned.role](config)
        else:
            raise TemplateMissing(planned.role)
        plan.add(planned.path, content)

    log.debug("Planned %d frontend files", len(plan), extra=extra)
    return plan
