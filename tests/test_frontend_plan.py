"""End-to-end tests for Vite and Angular frontend generation."""
import json

from initializr.generators.frontend_gen.packages import aggregate_npm_packages, parse_npm_spec
from initializr.generators.plan import build_plan
from initializr.generators.preview import build_preview, file_paths


def _frontend(configure, **form):
    form.setdefault("projectType", "frontend")
    form.setdefault("frontendProjectName", "web")
    form.setdefault("frontendLanguage", "typescript")
    form.setdefault("frontendBuildTool", "vite")
    return configure(**form)


def _all_packages(plan):
    package_json = json.loads(plan.text("package.json"))
    return {**package_json["dependencies"], **package_json["devDependencies"]}


def test_react_typescript_tailwind(configure, registry):
    config = _frontend(configure, frontendFramework="react", frontendFeatures=["tailwind", "react-router"]).config
    plan = build_plan(config, registry)

    expected = {
        "package.json",
        "vite.config.ts",
        "tsconfig.json",
        "tailwind.config.js",
        "postcss.config.js",
        "src/main.tsx",
        "src/App.tsx",
        "src/components/HelloWorld.tsx",
        "src/styles/index.css",
        "src/router/index.tsx",
    }
    missing = expected - set(plan.paths())
    assert not missing, f"Missing files: {missing}"

    packages = _all_packages(plan)
    for name in ("react", "react-dom", "react-router-dom", "tailwindcss", "postcss", "autoprefixer"):
        assert name in packages, f"{name} missing from package.json"

    package_json = json.loads(plan.text("package.json"))
    assert package_json["name"] == "web"
    assert package_json["type"] == "module"
    assert "react-router-dom" in package_json["dependencies"]
    assert "tailwindcss" in package_json["devDependencies"]
    assert "@tailwind base;" in plan.text("src/styles/index.css")


def test_angular_forces_typescript_layout(configure, registry):
    result = _frontend(
        configure,
        frontendFramework="angular",
        frontendLanguage="javascript",
        frontendBuildTool="angular-cli",
    )
    assert result.config.frontend.language.id == "typescript"
    plan = build_plan(result.config, registry)

    for path in ("angular.json", "src/main.ts", "src/app/app.component.ts", "tsconfig.app.json"):
        assert path in plan, f"{path} missing from the Angular layout"
    for path in plan.paths():
        assert not path.endswith((".tsx", ".jsx", ".vue", ".svelte")), f"Unexpected {path}"
        assert not path.startswith("vite.config"), "Angular projects are not built with Vite"

    package_json = json.loads(plan.text("package.json"))
    assert "type" not in package_json
    assert "@angular/core" in package_json["dependencies"]
    assert json.loads(plan.text("angular.json"))["projects"]["web"]["sourceRoot"] == "src"


def test_vue_javascript_layout(configure, registry):
    config = _frontend(
        configure,
        frontendFramework="vue",
        frontendLanguage="javascript",
        frontendFeatures=["vue-router", "pinia"],
    ).config
    plan = build_plan(config, registry)

    assert "src/App.vue" in plan
    assert "src/main.js" in plan
    assert "src/router/index.js" in plan
    assert "tsconfig.json" not in plan
    packages = _all_packages(plan)
    assert "vue-router" in packages and "pinia" in packages


def test_svelte_has_svelte_config(configure, registry):
    config = _frontend(configure, frontendFramework="svelte", frontendFeatures=["prettier"]).config
    plan = build_plan(config, registry)
    assert "svelte.config.js" in plan
    assert ".prettierrc" in plan
    assert "prettier-plugin-svelte" in _all_packages(plan)


def test_eslint_gating(configure, registry):
    with_lint = build_plan(_frontend(configure, frontendFramework="react", frontendLinter="eslint").config, registry)
    without = build_plan(_frontend(configure, frontendFramework="react", frontendLinter="none").config, registry)
    assert ".eslintrc.cjs" in with_lint
    assert ".eslintrc.cjs" not in without
    assert "eslint" in _all_packages(with_lint)
    assert "eslint" not in _all_packages(without)


def test_custom_npm_packages(configure):
    config = _frontend(
        configure,
        frontendFramework="react",
        npmPackages=["lodash@^4.17.21", "@scope/pkg", "react"],
    ).config
    dependencies, dev_dependencies = aggregate_npm_packages(config)
    assert dependencies["lodash"] == "^4.17.21"
    assert dependencies["@scope/pkg"] == "latest"
    assert list(dependencies) == sorted(dependencies)
    assert list(dev_dependencies) == sorted(dev_dependencies)


def test_parse_npm_spec():
    assert parse_npm_spec("@scope/pkg@1.2.3") == ("@scope/pkg", "1.2.3")
    assert parse_npm_spec("@scope/pkg") == ("@scope/pkg", "latest")
    assert parse_npm_spec("react") == ("react", "^18.3.1")


def test_frontend_preview_matches_plan(configure, registry):
    for framework in ("react", "vue", "svelte", "angular"):
        config = _frontend(
            configure,
            frontendFramework=framework,
            frontendBuildTool="angular-cli" if framework == "angular" else "vite",
            frontendLinter="eslint",
            frontendFeatures=["prettier", "tailwind"],
        ).config
        assert file_paths(build_preview(config)) == build_plan(config, registry).paths(), framework


def test_frontend_generation_is_deterministic(configure, registry):
    form = dict(frontendFramework="react", frontendFeatures=["tailwind", "vitest"])
    first = build_plan(_frontend(configure, **form).config, registry)
    second = build_plan(_frontend(configure, **form).config, registry)
    assert first.items() == second.items()


def test_vitest_ships_a_component_test(configure, registry):
    expected = {
        ("react", "typescript"): "src/components/HelloWorld.test.tsx",
        ("react", "javascript"): "src/components/HelloWorld.test.jsx",
        ("vue", "typescript"): "src/components/HelloWorld.test.ts",
        ("svelte", "javascript"): "src/components/HelloWorld.test.js",
    }
    for (framework, language), path in expected.items():
        config = _frontend(
            configure, frontendFramework=framework, frontendLanguage=language, frontendFeatures=["vitest"],
        ).config
        plan = build_plan(config, registry)
        assert path in plan, f"{framework}/{language} has no component test"
        test_source = plan.text(path)
        assert "from 'vitest'" in test_source
        assert "HelloWorld" in test_source
        assert json.loads(plan.text("package.json"))["scripts"]["test"] == "vitest"


def test_component_test_only_with_vitest(configure, registry):
    plan = build_plan(_frontend(configure, frontendFramework="react").config, registry)
    assert not any(".test." in path for path in plan.paths())
