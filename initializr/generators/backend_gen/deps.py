"""Dependency aggregation for go.mod."""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from initializr.schemas.project import ProjectConfig

# Versions known to build together; anything else resolves through `go mod tidy`
GO_MODULE_VERSIONS: Dict[str, str] = {
    "github.com/gin-gonic/gin": "v1.10.0",
    "github.com/labstack/echo/v4": "v4.12.0",
    "github.com/gofiber/fiber/v2": "v2.52.5",
    "github.com/go-chi/chi/v5": "v5.1.0",
    "gorm.io/gorm": "v1.25.12",
    "gorm.io/driver/postgres": "v1.5.9",
    "gorm.io/driver/mysql": "v1.5.7",
    "gorm.io/driver/sqlite": "v1.5.6",
    "github.com/jmoiron/sqlx": "v1.4.0",
    "entgo.io/ent": "v0.14.1",
    "github.com/lib/pq": "v1.10.9",
    "github.com/go-sql-driver/mysql": "v1.8.1",
    "github.com/mattn/go-sqlite3": "v1.14.24",
    "cloud.google.com/go/bigquery": "v1.63.1",
    "go.mongodb.org/mongo-driver": "v1.17.1",
    "github.com/redis/go-redis/v9": "v9.7.0",
    "github.com/rs/zerolog": "v1.33.0",
    "github.com/stretchr/testify": "v1.9.0",
}

UNPINNED_VERSION = "latest"


@dataclass(frozen=True)
class Requirement:
    path: str
    version: str


def parse_go_spec(spec: str) -> Tuple[str, Optional[str]]:
    """Split ``path@version`` into its parts; the version is None when absent."""
    path, _, version = spec.strip().partition("@")
    return path, version or None


def _custom_versions(config: ProjectConfig) -> Dict[str, str]:
    versions = {}
    for spec in config.custom_packages:
        path, version = parse_go_spec(spec)
        if version and path not in versions:
            versions[path] = version
    return versions


def aggregate_imports(config: ProjectConfig) -> List[str]:
    """Collect import paths in manifest order, deduplicated by first sighting.

    Order: HTTP framework, each driver followed by its per-store extras,
    feature imports, then custom packages with any ``@version`` removed.
    """
    imports: List[str] = []
    if config.http_package is not None and config.http_package.import_path:
        imports.append(config.http_package.import_path)

    for selection in config.databases:
        driver = selection.driver
        if driver is None:
            continue
        if driver.import_path:
            imports.append(driver.import_path)
        imports.extend(driver.extra_imports(selection.database.id))

    for feature in config.features:
        if feature.import_path:
            imports.append(feature.import_path)

    imports.extend(parse_go_spec(spec)[0] for spec in config.custom_packages)

    seen = set()
    unique = []
    for path in imports:
        if path and path not in seen:
            seen.add(path)
            unique.append(path)
    return unique


def module_requirements(config: ProjectConfig) -> List[Requirement]:
    """A version given with a custom package wins over the pinned one."""
    custom = _custom_versions(config)
    return [
        Requirement(path=path, version=custom.get(path) or GO_MODULE_VERSIONS.get(path, UNPINNED_VERSION))
        for path in aggregate_imports(config)
    ]
