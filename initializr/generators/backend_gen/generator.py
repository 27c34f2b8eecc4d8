"""Orchestrator for Go backend generation."""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from initializr.generators.backend_gen.deps import module_requirements
from initializr.generators.backend_gen.render import (
    render_air_toml,
    render_docker_compose,
    render_dockerfile,
    render_domain_model,
    render_env_example,
    render_gitignore,
    render_handler,
    render_logger,
    render_makefile,
    render_service,
    render_service_test,
    render_testutil,
)
from initializr.generators.backend_gen.stores import SQL_IMPORTS, USER_TABLE_DDL, store_for
from initializr.generators.templates import TemplateRegistry
from initializr.generators.types import FilePlan, PlannedFile
from initializr.generators.utils import go_package_name
from initializr.schemas.project import ProjectConfig

log = logging.getLogger(__name__)

MAIN_FALLBACK = "gin"
STORAGE_FALLBACK = "gorm"

# Stores that can back the user repository; BigQuery is analytics-only
_REPOSITORY_CAPABLE = {"postgres", "mysql", "sqlite", "mongodb", "redis"}


@dataclass(frozen=True)
class StoreBinding:
    """One opened store in main.go: a database served by a driver."""
    database: str
    name: str
    label: str
    field: str
    env: str
    dsn: str
    driver: Optional[str] = None
    driver_name: Optional[str] = None
    alias: str = ""
    var: str = ""
    dialect: Optional[str] = None
    sql_import: Optional[str] = None
    ddl: str = ""


@dataclass(frozen=True)
class DriverBinding:
    id: str
    name: str
    alias: str


def storage_package(driver_id: str) -> str:
    return go_package_name(driver_id) + "store"


def bind_stores(config: ProjectConfig) -> List[StoreBinding]:
    """Describe every selected database, whether or not a driver serves it."""
    bindings = []
    for selection in config.databases:
        store = store_for(selection.database.id)
        driver = selection.driver
        dialect = store.sql_dialect
        bindings.append(StoreBinding(
            database=store.id,
            name=selection.database.name,
            label=store.label,
            field=store.field,
            env=store.env,
            dsn=store.dsn(config.project_name),
            driver=driver.id if driver else None,
            driver_name=driver.name if driver else None,
            alias=storage_package(driver.id) if driver else "",
            var=go_package_name(store.id) + "Store",
            dialect=dialect,
            sql_import=SQL_IMPORTS.get(dialect) if dialect else None,
            ddl=USER_TABLE_DDL.get(dialect, "") if dialect else "",
        ))
    return bindings


def _base_context(config: ProjectConfig) -> Dict:
    databases = bind_stores(config)
    stores = [binding for binding in databases if binding.driver]
    repo_store = next((b for b in stores if b.database in _REPOSITORY_CAPABLE), None)
    drivers = [
        DriverBinding(id=driver.id, name=driver.name, alias=storage_package(driver.id))
        for driver in config.drivers()
    ]
    return {
        "module": config.project_name,
        "databases": databases,
        "field_width": max((len(binding.field) for binding in databases), default=0),
        "stores": stores,
        "repo_store": repo_store,
        "drivers": drivers,
    }


def _render_role(registry: TemplateRegistry, config: ProjectConfig, planned: PlannedFile,
                 fallback: Optional[str] = None, **context) -> str:
    template = registry.resolve(planned.role, planned.variant, fallback)
    return registry.render(template, config, role=planned.role, **context)


def generate_backend(config: ProjectConfig, registry: TemplateRegistry, layout: List[PlannedFile]) -> FilePlan:
    """Render every planned backend file into a FilePlan."""
    context = _base_context(config)
    memory_repository = context["repo_store"] is None
    extra = {"project": config.project_name, "step": "plan"}

    compiled: Dict[str, Callable[[], str]] = {
        "domain": lambda: render_domain_model(config),
        "service": lambda: render_service(config, memory_repository),
        "handler": lambda: render_handler(config),
        "gitignore": render_gitignore,
        "makefile": lambda: render_makefile(config),
        "env": lambda: render_env_example(config),
        "air": lambda: render_air_toml(config),
        "dockerfile": lambda: render_dockerfile(config),
        "compose": lambda: render_docker_compose(config),
        "logger": render_logger,
        "testutil": lambda: render_testutil(config),
        "service_test": lambda: render_service_test(config),
    }

    plan = FilePlan(config.project_name)
    for planned in layout:
        if planned.role in compiled:
            content = compiled[planned.role]()
        elif planned.role == "module":
            content = _render_role(registry, config, planned, requires=module_requirements(config), **context)
        elif planned.role == "main":
            content = _render_role(registry, config, planned, MAIN_FALLBACK, **context)
        elif planned.role == "storage":
            served = [b for b in context["stores"] if b.driver == planned.variant]
            content = _render_role(
                registry, config, planned, STORAGE_FALLBACK,
                module=config.project_name,
                package=storage_package(planned.variant),
                databases=served,
                bigquery=any(b.database == "bigquery" for b in served),
                database_name=go_package_name(config.project_name),
                key_prefix=config.project_name,
            )
        else:
            content = _render_role(registry, config, planned, **context)
        plan.add(planned.path, content)
        log.debug("Rendered %s", planned.path, extra=extra)

    log.debug("Planned %d backend files", len(plan), extra=extra)
    return plan
