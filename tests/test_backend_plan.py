"""End-to-end tests for Go backend generation."""
import re

import yaml

from initializr.generators.archive import build_archive
from initializr.generators.backend_gen.deps import aggregate_imports, module_requirements, parse_go_spec
from initializr.generators.layout import BACKEND_FEATURE_FILES
from initializr.generators.plan import build_plan
from initializr.generators.preview import build_preview, file_paths

BASE_PATHS = {
    "go.mod",
    "README.md",
    "cmd/svc/main.go",
    "internal/config/config.go",
    "internal/domain/model.go",
    "internal/service/service.go",
    "internal/handler/handler.go",
}


def _backend(configure, **form):
    form.setdefault("projectName", "svc")
    form.setdefault("goVersion", "1.23")
    form.setdefault("httpPackage", "gin")
    return configure(**form)


def test_minimal_backend(configure, registry):
    """A gin service with gitignore and makefile produces exactly the base tree."""
    config = _backend(configure, features=["gitignore", "makefile"]).config
    plan = build_plan(config, registry)

    assert set(plan.paths()) == BASE_PATHS | {".gitignore", "Makefile"}
    go_mod = plan.text("go.mod")
    assert go_mod.startswith("module svc\n\ngo 1.23\n")
    assert "github.com/gin-gonic/gin" in go_mod
    assert "gorm" not in go_mod
    assert "internal/storage" not in plan.text("cmd/svc/main.go")

    for path in plan.paths():
        assert plan[path], f"File {path} is empty"


def test_postgres_with_gorm(configure, registry):
    config = _backend(configure, databases=["postgres"], driver_postgres="gorm").config
    plan = build_plan(config, registry)

    assert "internal/storage/gorm/gorm.go" in plan
    assert "docker-compose.yml" not in plan, "docker feature was not selected"
    go_mod = plan.text("go.mod")
    assert "gorm.io/gorm v1.25.12" in go_mod
    assert "gorm.io/driver/postgres" in go_mod

    storage = plan.text("internal/storage/gorm/gorm.go")
    assert storage.startswith("package gormstore")
    assert "OpenPostgres" in storage
    main_go = plan.text("cmd/svc/main.go")
    assert 'gormstore "svc/internal/storage/gorm"' in main_go
    assert "POSTGRES_DSN" in plan.text("internal/config/config.go")


def test_incompatible_pair_omits_storage(configure, registry):
    result = _backend(configure, databases=["mongodb"], driver_mongodb="gorm")
    assert any("does not support store" in w for w in result.warnings)

    plan = build_plan(result.config, registry)
    assert not any(path.startswith("internal/storage/") for path in plan.paths())
    assert "gorm" not in plan.text("go.mod")
    assert "NewMemoryRepository" in plan.text("internal/service/service.go")


def test_docker_compose_has_one_service_per_database(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "redis"],
        driver_postgres="sqlx",
        driver_redis="redis-client",
        features=["docker"],
    ).config
    plan = build_plan(config, registry)

    assert "Dockerfile" in plan
    compose = yaml.safe_load(plan.text("docker-compose.yml"))
    assert set(compose["services"]) == {"app", "postgres", "redis"}
    assert set(compose["volumes"]) == {"postgres_data", "redis_data"}
    assert compose["services"]["app"]["depends_on"] == ["postgres", "redis"]
    assert compose["services"]["app"]["environment"]["POSTGRES_DSN"].startswith("postgres://")
    assert "@postgres:5432" in compose["services"]["app"]["environment"]["POSTGRES_DSN"]


def test_compose_without_databases_only_has_app(configure, registry):
    plan = build_plan(_backend(configure, features=["docker"]).config, registry)
    compose = yaml.safe_load(plan.text("docker-compose.yml"))
    assert list(compose["services"]) == ["app"]
    assert "volumes" not in compose


def test_shared_driver_produces_one_storage_file(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "mysql"],
        driver_postgres="gorm",
        driver_mysql="gorm",
    ).config
    plan = build_plan(config, registry)

    storage_paths = [p for p in plan.paths() if p.startswith("internal/storage/")]
    assert storage_paths == ["internal/storage/gorm/gorm.go"]
    storage = plan.text("internal/storage/gorm/gorm.go")
    assert "OpenPostgres" in storage and "OpenMySQL" in storage


def test_every_http_framework_renders(configure, registry):
    for framework in ("gin", "echo", "fiber", "chi", "net-http"):
        config = _backend(configure, httpPackage=framework, databases=["sqlite"], driver_sqlite="database-sql").config
        plan = build_plan(config, registry)
        main_go = plan.text("cmd/svc/main.go")
        assert main_go.startswith("package main"), f"{framework} main.go is malformed"
        assert "{{" not in main_go and "{%" not in main_go, f"{framework} main.go has unrendered template syntax"


def test_every_driver_renders(configure, registry):
    pairs = {
        "gorm": "postgres",
        "sqlx": "mysql",
        "ent": "sqlite",
        "database-sql": "bigquery",
        "mongo-driver": "mongodb",
        "redis-client": "redis",
    }
    for driver, database in pairs.items():
        config = _backend(configure, databases=[database], **{f"driver_{database}": driver}).config
        plan = build_plan(config, registry)
        path = f"internal/storage/{driver}/{driver}.go"
        assert path in plan, f"Missing storage for {driver}"
        assert re.match(r"package \w+store\n", plan.text(path)), f"{driver} storage has a bad package clause"


def test_module_manifest_has_no_duplicates(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "mysql"],
        driver_postgres="sqlx",
        driver_mysql="sqlx",
        features=["logging", "testing"],
        customPackages=["github.com/jmoiron/sqlx", "github.com/google/uuid"],
    ).config
    imports = aggregate_imports(config)
    assert len(imports) == len(set(imports))
    assert imports[0] == "github.com/gin-gonic/gin"
    assert imports[-1] == "github.com/google/uuid"

    require_lines = [
        line.split()[0]
        for line in build_plan(config, registry).text("go.mod").splitlines()
        if line.startswith("\t")
    ]
    assert len(require_lines) == len(set(require_lines))
    assert "github.com/google/uuid latest" in build_plan(config, registry).text("go.mod")


def test_feature_gating(configure, registry):
    """Each feature file appears exactly when its feature is selected."""
    for feature, files in BACKEND_FEATURE_FILES.items():
        with_feature = build_plan(_backend(configure, features=[feature]).config, registry)
        without = build_plan(_backend(configure).config, registry)
        for path, _ in files:
            assert path in with_feature, f"{path} missing with {feature}"
            assert path not in without, f"{path} present without {feature}"


def test_paths_never_escape(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "mongodb"],
        driver_postgres="ent",
        driver_mongodb="mongo-driver",
        features=[f for f in BACKEND_FEATURE_FILES],
    ).config
    for path in build_plan(config, registry).paths():
        assert not path.startswith("/")
        assert ".." not in path.split("/")
        assert not path.startswith("svc/svc/")


def test_generation_is_deterministic(configure, registry):
    form = dict(databases=["postgres"], driver_postgres="gorm", features=["docker", "logging"])
    first = build_plan(_backend(configure, **form).config, registry)
    second = build_plan(_backend(configure, **form).config, registry)
    assert first.items() == second.items()
    assert build_archive(first) == build_archive(second)


def test_preview_matches_plan(configure, registry):
    config = _backend(
        configure,
        databases=["redis", "bigquery"],
        driver_redis="redis-client",
        driver_bigquery="database-sql",
        features=["testing", "air", "env"],
    ).config
    assert file_paths(build_preview(config)) == build_plan(config, registry).paths()


def test_bigquery_only_uses_memory_repository(configure, registry):
    config = _backend(configure, databases=["bigquery"], driver_bigquery="database-sql").config
    plan = build_plan(config, registry)
    assert "NewMemoryRepository" in plan.text("internal/service/service.go")
    assert "cloud.google.com/go/bigquery" in plan.text("go.mod")


def _import_block(source):
    return source.split("import (\n", 1)[1].split("\n)", 1)[0]


def _sorted_groups(block):
    """Import paths per blank-line separated group, as gofmt orders them."""
    for group in block.split("\n\n"):
        paths = [line.split('"')[1] for line in group.splitlines() if '"' in line]
        yield paths


def test_config_fields_are_column_aligned(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "redis", "bigquery"],
        driver_postgres="gorm",
        driver_redis="redis-client",
        driver_bigquery="database-sql",
    ).config
    config_go = build_plan(config, registry).text("internal/config/config.go")

    assert "\tPostgresDSN     string\n" in config_go
    assert "\tRedisAddr       string\n" in config_go
    assert "\tBigQueryProject string\n" in config_go
    assert '\t\t\tRedisAddr:       getEnv("REDIS_ADDR", "localhost:6379"),\n' in config_go
    assert '\t\t\tBigQueryProject: getEnv("BIGQUERY_PROJECT", "svc"),\n' in config_go


def test_config_without_databases_uses_empty_struct(configure, registry):
    config_go = build_plan(_backend(configure).config, registry).text("internal/config/config.go")
    assert "type DatabaseConfig struct{}\n" in config_go
    assert "\t\tDatabase: DatabaseConfig{},\n" in config_go


def test_imports_are_sorted_within_groups(configure, registry):
    config = _backend(
        configure,
        databases=["postgres", "mysql", "sqlite", "redis"],
        driver_postgres="sqlx",
        driver_mysql="sqlx",
        driver_sqlite="gorm",
        driver_redis="redis-client",
        features=["logging"],
    ).config
    plan = build_plan(config, registry)
    for path in ("cmd/svc/main.go", "internal/storage/sqlx/sqlx.go", "internal/storage/gorm/gorm.go"):
        for group in _sorted_groups(_import_block(plan.text(path))):
            assert group == sorted(group), f"{path} imports out of order: {group}"

    main_go = plan.text("cmd/svc/main.go")
    assert main_go.index('gormstore "svc/internal/storage/gorm"') < main_go.index(
        'redisclientstore "svc/internal/storage/redis-client"'
    )


def test_bigquery_storage_has_empty_schema_literal(configure, registry):
    config = _backend(configure, databases=["bigquery"], driver_bigquery="database-sql").config
    storage = build_plan(config, registry).text("internal/storage/database-sql/database-sql.go")
    assert "var schema = map[string]string{}\n" in storage


def test_custom_package_version_is_split_from_path(configure, registry):
    config = _backend(
        configure,
        customPackages=["github.com/google/uuid@v1.6.0", "github.com/gin-gonic/gin@v1.9.1"],
    ).config
    assert parse_go_spec("github.com/google/uuid@v1.6.0") == ("github.com/google/uuid", "v1.6.0")
    assert parse_go_spec("github.com/google/uuid") == ("github.com/google/uuid", None)
    assert aggregate_imports(config) == ["github.com/gin-gonic/gin", "github.com/google/uuid"]

    requirements = {req.path: req.version for req in module_requirements(config)}
    assert requirements == {"github.com/gin-gonic/gin": "v1.9.1", "github.com/google/uuid": "v1.6.0"}
    go_mod = build_plan(config, registry).text("go.mod")
    assert "\tgithub.com/google/uuid v1.6.0\n" in go_mod
    assert "@" not in go_mod
