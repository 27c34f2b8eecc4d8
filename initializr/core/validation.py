"""Turns a raw form submission into a canonical ProjectConfig.

The validator is the only place that decides defaults and compatibility. It
collects human-readable warnings instead of failing, except for an empty
project name which blocks generation.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from initializr.catalog import find_option
from initializr.core.errors import ConfigInvalid
from initializr.schemas.options import Option, OptionCatalog
from initializr.schemas.project import DatabaseSelection, FrontendConfig, ProjectConfig

log = logging.getLogger(__name__)

MAX_CUSTOM_PACKAGES = 20

SQL_DRIVERS = {"gorm", "sqlx", "ent", "database-sql"}

# store id -> driver ids able to serve it
DRIVER_SUPPORT: Dict[str, set] = {
    "postgres": SQL_DRIVERS,
    "mysql": SQL_DRIVERS,
    "sqlite": SQL_DRIVERS,
    "mongodb": {"mongo-driver"},
    "redis": {"redis-client"},
    "bigquery": {"database-sql"},
}

_UNSAFE_NAME_CHARS = re.compile(r"[^a-z0-9._-]")


@dataclass
class ValidationResult:
    config: ProjectConfig
    warnings: List[str] = field(default_factory=list)


def is_compatible(database_id: str, driver_id: str) -> bool:
    return driver_id in DRIVER_SUPPORT.get(database_id, set())


def canonical_project_name(raw: str) -> str:
    """Trim, kebab-case inner whitespace and lowercase."""
    return re.sub(r"\s+", "-", raw.strip()).lower()


def _getlist(form: Mapping[str, Any], key: str) -> List[str]:
    if hasattr(form, "getlist"):
        values = form.getlist(key)
    else:
        value = form.get(key)
        if value is None:
            values = []
        elif isinstance(value, (list, tuple)):
            values = list(value)
        else:
            values = [value]
    return [str(v).strip() for v in values if str(v).strip()]


def _get(form: Mapping[str, Any], key: str) -> str:
    values = _getlist(form, key)
    return values[0] if values else ""


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class _Collector:
    def __init__(self, catalog: OptionCatalog):
        self.catalog = catalog
        self.warnings: List[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def option(self, options: List[Option], option_id: str, label: str) -> Optional[Option]:
        if not option_id:
            return None
        option = find_option(options, option_id)
        if option is None:
            self.warn(f"Unknown {label} '{option_id}' was ignored.")
        return option

    def options(self, options: List[Option], ids: List[str], label: str) -> List[Option]:
        resolved = []
        for option_id in _dedupe(ids):
            option = self.option(options, option_id, label)
            if option is not None:
                resolved.append(option)
        return resolved

    def project_name(self, raw: str) -> str:
        name = canonical_project_name(raw)
        if not name:
            raise ConfigInvalid("Project name cannot be empty.")
        safe = _UNSAFE_NAME_CHARS.sub("-", name)
        safe = re.sub(r"-{2,}", "-", safe).strip("-.")
        if not safe:
            raise ConfigInvalid("Project name cannot be empty.")
        if safe != name:
            self.warn(f"Project name '{raw.strip()}' was normalized to '{safe}'.")
        return safe

    def custom_packages(self, raw: List[str]) -> List[str]:
        packages = _dedupe(raw)
        if len(packages) > MAX_CUSTOM_PACKAGES:
            self.warn(f"Only the first {MAX_CUSTOM_PACKAGES} custom packages were kept.")
            packages = packages[:MAX_CUSTOM_PACKAGES]
        return packages


def validate_submission(form: Mapping[str, Any], catalog: OptionCatalog) -> ValidationResult:
    """Resolve a form submission against the catalog.

    Raises ConfigInvalid when the project name is empty.
    """
    collector = _Collector(catalog)

    project_type = _get(form, "projectType") or "backend"
    if project_type not in ("backend", "frontend"):
        collector.warn(f"Unknown project type '{project_type}', generating a backend project.")
        project_type = "backend"

    if project_type == "frontend":
        config = _validate_frontend(form, collector)
    else:
        config = _validate_backend(form, collector)

    for warning in collector.warnings:
        log.info("Validation warning: %s", warning, extra={"project": config.project_name, "step": "validate"})
    return ValidationResult(config=config, warnings=collector.warnings)


def _language_version(form: Mapping[str, Any], collector: _Collector, warn: bool) -> str:
    versions = collector.catalog.language_versions
    version = _get(form, "goVersion")
    if not version:
        if warn:
            collector.warn(f"Go version must be selected, defaulting to {versions[0]}.")
        return versions[0]
    if version not in versions:
        collector.warn(f"Unknown Go version '{version}', defaulting to {versions[0]}.")
        return versions[0]
    return version


def _validate_backend(form: Mapping[str, Any], collector: _Collector) -> ProjectConfig:
    catalog = collector.catalog
    project_name = collector.project_name(_get(form, "projectName"))
    version = _language_version(form, collector, warn=True)

    http_id = _get(form, "httpPackage")
    http_package = collector.option(catalog.http, http_id, "HTTP framework")
    if http_package is None:
        http_package = find_option(catalog.http, "gin") or catalog.http[0]
        if not http_id:
            collector.warn(f"No HTTP framework selected, defaulting to {http_package.name}.")

    databases = []
    for database in collector.options(catalog.databases, _getlist(form, "databases"), "database"):
        driver_id = _get(form, f"driver_{database.id}")
        driver = collector.option(catalog.db_drivers, driver_id, "database driver")
        if driver is None:
            if not driver_id:
                collector.warn(f"No driver selected for {database.name}; its storage layer was skipped.")
        elif not is_compatible(database.id, driver.id):
            collector.warn(
                f"Driver {driver.name} does not support store {database.name}; "
                f"its storage layer was skipped."
            )
            driver = None
        databases.append(DatabaseSelection(database=database, driver=driver))

    config = ProjectConfig(
        project_name=project_name,
        language_version=version,
        project_type="backend",
        http_package=http_package,
        databases=databases,
        features=collector.options(catalog.features, _getlist(form, "features"), "feature"),
        custom_packages=collector.custom_packages(_getlist(form, "customPackages")),
    )
    return config


def _validate_frontend(form: Mapping[str, Any], collector: _Collector) -> ProjectConfig:
    options = collector.catalog.frontend
    project_name = collector.project_name(_get(form, "frontendProjectName") or _get(form, "projectName"))

    framework = collector.option(options.frameworks, _get(form, "frontendFramework"), "frontend framework")
    if framework is None:
        framework = find_option(options.frameworks, "react") or options.frameworks[0]
        collector.warn(f"Frontend framework must be selected, defaulting to {framework.name}.")

    language = collector.option(options.languages, _get(form, "frontendLanguage"), "frontend language")
    if framework.id == "angular":
        # Angular only ships a TypeScript toolchain
        language = find_option(options.languages, "typescript")
    elif language is None:
        language = find_option(options.languages, "typescript") or options.languages[0]
        collector.warn(f"Frontend language must be selected, defaulting to {language.name}.")

    build_tool = collector.option(options.build_tools, _get(form, "frontendBuildTool"), "build tool")
    expected_tool = "angular-cli" if framework.id == "angular" else "vite"
    if build_tool is None:
        build_tool = find_option(options.build_tools, expected_tool)
        collector.warn(f"Build tool must be selected, defaulting to {build_tool.name}.")
    elif build_tool.id != expected_tool:
        replacement = find_option(options.build_tools, expected_tool)
        collector.warn(f"{framework.name} projects are built with {replacement.name}, not {build_tool.name}.")
        build_tool = replacement

    linter = collector.option(options.linters, _get(form, "frontendLinter"), "linter")
    if linter is None:
        linter = find_option(options.linters, "none") or options.linters[-1]

    features = []
    for feature in collector.options(options.features, _getlist(form, "frontendFeatures"), "frontend feature"):
        if feature.applies_to(framework.id):
            features.append(feature)
        else:
            collector.warn(f"{feature.name} is not available for {framework.name} and was skipped.")

    frontend = FrontendConfig(
        framework=framework,
        language=language,
        build_tool=build_tool,
        linter=linter,
        features=features,
        custom_packages=collector.custom_packages(_getlist(form, "npmPackages")),
    )
    return ProjectConfig(
        project_name=project_name,
        language_version=_language_version(form, collector, warn=False),
        project_type="frontend",
        frontend=frontend,
    )
