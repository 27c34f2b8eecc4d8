"""Preview tree of the files a configuration would produce.

Built from ``plan_layout`` alone, so the preview never touches the template
registry and cannot fail on a broken template.
"""
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List

from initializr.generators.layout import plan_layout
from initializr.schemas.project import ProjectConfig

FOLDER_ICON = "folder"
DEFAULT_ICON = "file"

# Exact file names take precedence over extensions
NAME_ICONS = {
    "Dockerfile": "docker",
    "docker-compose.yml": "docker",
    "Makefile": "makefile",
    ".gitignore": "git",
    ".gitkeep": "git",
    "go.mod": "go",
    "package.json": "npm",
}

EXTENSION_ICONS = {
    ".go": "go",
    ".ts": "typescript",
    ".tsx": "react",
    ".js": "javascript",
    ".jsx": "react",
    ".vue": "vue",
    ".svelte": "svelte",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".md": "markdown",
    ".css": "css",
    ".html": "html",
    ".cjs": "javascript",
}

LANGUAGES = {
    ".go": "go",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".cjs": "javascript",
    ".jsx": "jsx",
    ".vue": "markup",
    ".svelte": "markup",
    ".html": "markup",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".md": "markdown",
    ".css": "css",
}


@dataclass(frozen=True)
class PreviewNode:
    path: str
    name: str
    depth: int
    is_folder: bool
    icon: str


def icon_for(name: str) -> str:
    if name in NAME_ICONS:
        return NAME_ICONS[name]
    if name.startswith(".env"):
        return "env"
    return EXTENSION_ICONS.get(PurePosixPath(name).suffix, DEFAULT_ICON)


def detect_language(path: str) -> str:
    """Syntax-highlighter hint for a generated file."""
    name = PurePosixPath(path).name
    if name == "Dockerfile":
        return "docker"
    if name == "Makefile":
        return "makefile"
    if name == "go.mod":
        return "go-module"
    if name.startswith(".env"):
        return "bash"
    if name in (".prettierrc",):
        return "json"
    return LANGUAGES.get(PurePosixPath(name).suffix, "plaintext")


def _insert(tree: Dict, parts: List[str]) -> None:
    node = tree
    for folder in parts[:-1]:
        node = node.setdefault(folder, {})
    node[parts[-1]] = None


def _walk(tree: Dict, prefix: str, depth: int, out: List[PreviewNode]) -> None:
    folders = sorted(name for name, child in tree.items() if child is not None)
    files = sorted(name for name, child in tree.items() if child is None)
    for name in folders:
        path = f"{prefix}{name}"
        out.append(PreviewNode(path=path, name=name, depth=depth, is_folder=True, icon=FOLDER_ICON))
        _walk(tree[name], f"{path}/", depth + 1, out)
    for name in files:
        out.append(PreviewNode(path=f"{prefix}{name}", name=name, depth=depth, is_folder=False, icon=icon_for(name)))


def build_preview(config: ProjectConfig) -> List[PreviewNode]:
    """Return folder and file nodes in display order.

    Ancestors precede descendants, folders precede files within a level and
    names sort alphabetically.
    """
    tree: Dict = {}
    for planned in plan_layout(config):
        _insert(tree, planned.path.split("/"))
    nodes: List[PreviewNode] = []
    _walk(tree, "", 0, nodes)
    return nodes


def file_paths(nodes: List[PreviewNode]) -> List[str]:
    return sorted(node.path for node in nodes if not node.is_folder)
