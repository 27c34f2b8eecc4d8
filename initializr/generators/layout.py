"""Path composition shared by the plan and preview builders.

``plan_layout`` is the single place that decides which files a configuration
produces. The plan builder renders every entry; the preview builder only reads
the paths.
"""
from typing import List

from initializr.generators.types import PlannedFile, check_relative_path
from initializr.schemas.project import ProjectConfig

# Feature-gated backend files: feature id -> [(path, role)]
BACKEND_FEATURE_FILES = {
    "gitignore": [(".gitignore", "gitignore")],
    "makefile": [("Makefile", "makefile")],
    "env": [(".env.example", "env")],
    "air": [(".air.toml", "air")],
    "docker": [("Dockerfile", "dockerfile"), ("docker-compose.yml", "compose")],
    "logging": [("internal/logger/logger.go", "logger")],
    "testing": [("internal/testutil/testutil.go", "testutil"), ("internal/service/service_test.go", "service_test")],
}


def plan_layout(config: ProjectConfig) -> List[PlannedFile]:
    """Return every file the configuration produces, sorted by path."""
    if config.is_frontend:
        if config.frontend.framework.id == "angular":
            files = _angular_layout(config)
        else:
            files = _vite_layout(config)
    else:
        files = _backend_layout(config)

    for planned in files:
        check_relative_path(planned.path, config.project_name)
    return sorted(files, key=lambda planned: planned.path)


def _backend_layout(config: ProjectConfig) -> List[PlannedFile]:
    http_id = config.http_package.id if config.http_package else "gin"
    files = [
        PlannedFile("go.mod", "module"),
        PlannedFile("README.md", "readme"),
        PlannedFile(f"cmd/{config.project_name}/main.go", "main", http_id),
        PlannedFile("internal/config/config.go", "config"),
        PlannedFile("internal/domain/model.go", "domain"),
        PlannedFile("internal/service/service.go", "service"),
        PlannedFile("internal/handler/handler.go", "handler", http_id),
    ]
    for driver_id in config.storage_groups():
        files.append(PlannedFile(f"internal/storage/{driver_id}/{driver_id}.go", "storage", driver_id))

    for feature in config.features:
        for path, role in BACKEND_FEATURE_FILES.get(feature.id, []):
            files.append(PlannedFile(path, role))
    return files


def script_ext(config: ProjectConfig) -> str:
    return "ts" if config.frontend.is_typescript else "js"


def component_ext(config: ProjectConfig) -> str:
    framework = config.frontend.framework.id
    if framework == "react":
        return "tsx" if config.frontend.is_typescript else "jsx"
    return framework  # vue, svelte


def _vite_layout(config: ProjectConfig) -> List[PlannedFile]:
    fe = config.frontend
    framework = fe.framework.id
    ext = script_ext(config)
    cext = component_ext(config)
    # React mounts from JSX; Vue and Svelte bootstrap from plain scripts
    main_ext = cext if framework == "react" else ext

    files = [
        PlannedFile("package.json", "package.json", framework),
        PlannedFile("index.html", "index.html", framework),
        PlannedFile(f"vite.config.{ext}", "vite.config", framework),
        PlannedFile(f"src/main.{main_ext}", "main", framework),
        PlannedFile(f"src/App.{cext}", "app", framework),
        PlannedFile(f"src/components/HelloWorld.{cext}", "hello-world", framework),
        PlannedFile("src/assets/.gitkeep", "gitkeep"),
        PlannedFile(f"src/lib/hooks/index.{ext}", "lib-hooks", framework),
        PlannedFile(f"src/lib/types/index.{ext}", "lib-types"),
        PlannedFile(f"src/lib/validations/index.{ext}", "lib-validations"),
        PlannedFile(f"src/store/index.{ext}", "store", framework),
        PlannedFile("src/styles/index.css", "styles"),
        PlannedFile(".gitignore", "frontend-gitignore"),
        PlannedFile("README.md", "readme"),
    ]
    if fe.is_typescript:
        files += [
            PlannedFile("tsconfig.json", "tsconfig", framework),
            PlannedFile("tsconfig.node.json", "tsconfig.node"),
            PlannedFile("src/vite-env.d.ts", "vite-env", framework),
        ]
    if fe.has_feature("vitest"):
        test_ext = cext if framework == "react" else ext
        files.append(PlannedFile(f"src/components/HelloWorld.test.{test_ext}", "hello-world-test", framework))
    if framework == "svelte":
        files.append(PlannedFile("svelte.config.js", "svelte.config"))
    if fe.linter.id == "eslint":
        files.append(PlannedFile(".eslintrc.cjs", "eslint", framework))
    if fe.has_feature("prettier"):
        files += [PlannedFile(".prettierrc", "prettier"), PlannedFile(".prettierignore", "prettierignore")]
    if fe.has_feature("tailwind"):
        files += [PlannedFile("tailwind.config.js", "tailwind", framework), PlannedFile("postcss.config.js", "postcss")]
    if framework == "react" and fe.has_feature("react-router"):
        files.append(PlannedFile(f"src/router/index.{cext}", "router", framework))
    elif framework == "vue" and fe.has_feature("vue-router"):
        files.append(PlannedFile(f"src/router/index.{ext}", "router", framework))
    return files


def _angular_layout(config: ProjectConfig) -> List[PlannedFile]:
    fe = config.frontend
    files = [
        PlannedFile("package.json", "package.json", "angular"),
        PlannedFile("angular.json", "angular.json"),
        PlannedFile("tsconfig.json", "tsconfig", "angular"),
        PlannedFile("tsconfig.app.json", "tsconfig.app"),
        PlannedFile("src/index.html", "index.html", "angular"),
        PlannedFile("src/main.ts", "main", "angular"),
        PlannedFile("src/styles.css", "styles", "angular"),
        PlannedFile("src/app/app.component.ts", "app", "angular"),
        PlannedFile("src/app/app.component.html", "app-template"),
        PlannedFile("src/app/app.component.css", "app-styles"),
        PlannedFile("src/app/app.config.ts", "app-config"),
        PlannedFile("src/app/app.routes.ts", "app-routes"),
        PlannedFile("src/app/components/hello-world/hello-world.component.ts", "hello-world", "angular"),
        PlannedFile(".gitignore", "frontend-gitignore"),
        PlannedFile("README.md", "readme"),
    ]
    if fe.linter.id == "eslint":
        files.append(PlannedFile(".eslintrc.json", "eslint", "angular"))
    if fe.has_feature("prettier"):
        files.append(PlannedFile(".prettierrc", "prettier"))
    if fe.has_feature("tailwind"):
        files.append(PlannedFile("tailwind.config.js", "tailwind", "angular"))
    return files
