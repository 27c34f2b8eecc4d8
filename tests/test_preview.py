"""Tests for the preview tree."""
from initializr.generators.preview import build_preview, detect_language, icon_for


def test_preview_orders_folders_before_files(configure):
    config = configure(projectName="svc", goVersion="1.23", httpPackage="gin", features=["gitignore"]).config
    nodes = build_preview(config)

    top_level = [node for node in nodes if node.depth == 0]
    names = [node.name for node in top_level]
    assert names == ["cmd", "internal", ".gitignore", "README.md", "go.mod"]
    assert [node.is_folder for node in top_level] == [True, True, False, False, False]


def test_folders_appear_once_before_their_children(configure):
    config = configure(
        projectName="svc", goVersion="1.23", httpPackage="gin",
        databases=["postgres", "redis"], driver_postgres="gorm", driver_redis="redis-client",
    ).config
    nodes = build_preview(config)
    folders = [node.path for node in nodes if node.is_folder]
    assert len(folders) == len(set(folders))

    seen = set()
    for node in nodes:
        parent = node.path.rsplit("/", 1)[0] if "/" in node.path else None
        if parent is not None:
            assert parent in seen, f"{node.path} listed before its folder"
        seen.add(node.path)
        assert node.depth == node.path.count("/")


def test_icons():
    assert icon_for("main.go") == "go"
    assert icon_for("Dockerfile") == "docker"
    assert icon_for(".env.example") == "env"
    assert icon_for("App.vue") == "vue"
    assert icon_for("LICENSE") == "file"


def test_detect_language():
    assert detect_language("cmd/svc/main.go") == "go"
    assert detect_language("src/App.tsx") == "tsx"
    assert detect_language("docker-compose.yml") == "yaml"
    assert detect_language("Dockerfile") == "docker"
    assert detect_language("src/assets/.gitkeep") == "plaintext"
