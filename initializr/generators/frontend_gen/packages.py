"""package.json composition for frontend projects."""
import json
from collections import OrderedDict
from typing import Dict, List, Tuple

from initializr.schemas.project import ProjectConfig

# Versions known to work together; anything else is written as "latest"
NPM_VERSIONS: Dict[str, str] = {
    "react": "^18.3.1",
    "react-dom": "^18.3.1",
    "@types/react": "^18.3.11",
    "@types/react-dom": "^18.3.1",
    "@vitejs/plugin-react": "^4.3.3",
    "vue": "^3.5.12",
    "@vitejs/plugin-vue": "^5.1.4",
    "vue-tsc": "^2.1.6",
    "svelte": "^4.2.19",
    "@sveltejs/vite-plugin-svelte": "^3.1.2",
    "svelte-check": "^4.0.5",
    "@tsconfig/svelte": "^5.0.4",
    "tslib": "^2.8.0",
    "vite": "^5.4.10",
    "typescript": "~5.6.3",
    "@angular/animations": "^18.2.0",
    "@angular/common": "^18.2.0",
    "@angular/compiler": "^18.2.0",
    "@angular/core": "^18.2.0",
    "@angular/forms": "^18.2.0",
    "@angular/platform-browser": "^18.2.0",
    "@angular/router": "^18.2.0",
    "@angular/cli": "^18.2.10",
    "@angular/compiler-cli": "^18.2.0",
    "@angular-devkit/build-angular": "^18.2.10",
    "rxjs": "~7.8.1",
    "zone.js": "~0.14.10",
    "eslint": "^8.57.1",
    "@typescript-eslint/parser": "^8.11.0",
    "@typescript-eslint/eslint-plugin": "^8.11.0",
    "eslint-plugin-react": "^7.37.2",
    "eslint-plugin-react-hooks": "^5.0.0",
    "eslint-plugin-react-refresh": "^0.4.14",
    "eslint-plugin-vue": "^9.30.0",
    "eslint-plugin-svelte": "^2.46.0",
    "@angular-eslint/eslint-plugin": "^18.4.0",
    "@angular-eslint/template-parser": "^18.4.0",
    "prettier": "^3.3.3",
    "prettier-plugin-svelte": "^3.2.7",
    "tailwindcss": "^3.4.14",
    "postcss": "^8.4.47",
    "autoprefixer": "^10.4.20",
    "react-router-dom": "^6.27.0",
    "@tanstack/react-query": "^5.59.16",
    "axios": "^1.7.7",
    "vitest": "^2.1.3",
    "@testing-library/react": "^16.0.1",
    "@testing-library/jest-dom": "^6.6.2",
    "@testing-library/svelte": "^5.2.4",
    "@vue/test-utils": "^2.4.6",
    "jsdom": "^25.0.1",
    "vue-router": "^4.4.5",
    "pinia": "^2.2.4",
}

UNPINNED_VERSION = "latest"

# Feature packages that ship in the bundle; every other feature package is tooling
RUNTIME_FEATURE_PACKAGES = {"react-router-dom", "@tanstack/react-query", "axios", "vue-router", "pinia"}

_FRAMEWORK_RUNTIME = {
    "react": ["react", "react-dom"],
    "vue": ["vue"],
    "svelte": [],
    "angular": [
        "@angular/animations",
        "@angular/common",
        "@angular/compiler",
        "@angular/core",
        "@angular/forms",
        "@angular/platform-browser",
        "@angular/router",
        "rxjs",
        "tslib",
        "zone.js",
    ],
}

_FRAMEWORK_DEV = {
    "react": ["vite", "@vitejs/plugin-react"],
    "vue": ["vite", "@vitejs/plugin-vue"],
    "svelte": ["svelte", "vite", "@sveltejs/vite-plugin-svelte"],
    "angular": ["@angular/cli", "@angular-devkit/build-angular", "@angular/compiler-cli", "typescript"],
}

_TYPESCRIPT_DEV = {
    "react": ["typescript", "@types/react", "@types/react-dom"],
    "vue": ["typescript", "vue-tsc"],
    "svelte": ["typescript", "svelte-check", "tslib", "@tsconfig/svelte"],
    "angular": [],
}

_ESLINT_DEV = {
    "react": ["eslint", "eslint-plugin-react", "eslint-plugin-react-hooks", "eslint-plugin-react-refresh"],
    "vue": ["eslint", "eslint-plugin-vue"],
    "svelte": ["eslint", "eslint-plugin-svelte"],
    "angular": [
        "eslint",
        "@angular-eslint/eslint-plugin",
        "@angular-eslint/template-parser",
        "@typescript-eslint/parser",
        "@typescript-eslint/eslint-plugin",
    ],
}


def parse_npm_spec(spec: str) -> Tuple[str, str]:
    """Split ``name@version`` into its parts; scoped names keep their leading @."""
    spec = spec.strip()
    at = spec.rfind("@")
    if at > 0:
        name, version = spec[:at], spec[at + 1:]
        if version:
            return name, version
        return name, UNPINNED_VERSION
    return spec, NPM_VERSIONS.get(spec, UNPINNED_VERSION)


def _add(target: "OrderedDict[str, str]", names: List[str]) -> None:
    for name in names:
        if name not in target:
            target[name] = NPM_VERSIONS.get(name, UNPINNED_VERSION)


def aggregate_npm_packages(config: ProjectConfig) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Return ``(dependencies, devDependencies)`` for a frontend config.

    Order: framework, language tooling, linter, features, custom packages;
    deduplicated by package name with the first sighting kept. Both maps are
    sorted by name the way npm writes them.
    """
    fe = config.frontend
    framework = fe.framework.id
    runtime: "OrderedDict[str, str]" = OrderedDict()
    dev: "OrderedDict[str, str]" = OrderedDict()

    _add(runtime, _FRAMEWORK_RUNTIME.get(framework, []))
    _add(dev, _FRAMEWORK_DEV.get(framework, ["vite"]))
    if fe.is_typescript:
        _add(dev, _TYPESCRIPT_DEV.get(framework, ["typescript"]))
    if fe.linter.id == "eslint":
        eslint = list(_ESLINT_DEV.get(framework, ["eslint"]))
        if fe.is_typescript and framework != "angular":
            eslint += ["@typescript-eslint/parser", "@typescript-eslint/eslint-plugin"]
        _add(dev, eslint)

    for feature in fe.features:
        names = feature.extra_imports(framework) or feature.extra_imports("*")
        if feature.id == "prettier" and framework == "svelte":
            names = names + ["prettier-plugin-svelte"]
        for name in names:
            if name in runtime or name in dev:
                continue
            target = runtime if name in RUNTIME_FEATURE_PACKAGES else dev
            _add(target, [name])

    for spec in fe.custom_packages:
        name, version = parse_npm_spec(spec)
        if name and name not in runtime and name not in dev:
            runtime[name] = version

    return dict(sorted(runtime.items())), dict(sorted(dev.items()))


def _scripts(config: ProjectConfig) -> Dict[str, str]:
    fe = config.frontend
    framework = fe.framework.id
    if framework == "angular":
        scripts = {
            "ng": "ng",
            "start": "ng serve",
            "build": "ng build",
            "watch": "ng build --watch --configuration development",
        }
        if fe.linter.id == "eslint":
            scripts["lint"] = "eslint \"src/**/*.{ts,html}\""
    else:
        build = "vite build"
        if fe.is_typescript and framework == "react":
            build = "tsc -b && vite build"
        elif fe.is_typescript and framework == "vue":
            build = "vue-tsc -b && vite build"
        scripts = {"dev": "vite", "build": build, "preview": "vite preview"}
        if fe.is_typescript and framework == "svelte":
            scripts["check"] = "svelte-check --tsconfig ./tsconfig.json"
        if fe.linter.id == "eslint":
            extensions = {"react": "js,jsx,ts,tsx", "vue": "js,ts,vue", "svelte": "js,ts,svelte"}[framework]
            scripts["lint"] = f"eslint . --ext {extensions}"
        if fe.has_feature("vitest"):
            scripts["test"] = "vitest"
    if fe.has_feature("prettier"):
        scripts["format"] = "prettier --write ."
    return scripts


def render_package_json(config: ProjectConfig) -> str:
    """Generate package.json content."""
    dependencies, dev_dependencies = aggregate_npm_packages(config)
    document = {
        "name": config.project_name,
        "private": True,
        "version": "0.0.0",
    }
    if config.frontend.framework.id != "angular":
        document["type"] = "module"
    document["scripts"] = _scripts(config)
    document["dependencies"] = dependencies
    document["devDependencies"] = dev_dependencies
    return json.dumps(document, indent=2) + "\n"
