"""Tests for turning form submissions into ProjectConfig."""
import pytest

from initializr.core.errors import ConfigInvalid
from initializr.core.validation import canonical_project_name, is_compatible


class TestProjectName:
    def test_empty_name_is_rejected(self, configure):
        with pytest.raises(ConfigInvalid):
            configure(projectName="   ", goVersion="1.23")

    def test_name_is_canonicalised(self, configure):
        result = configure(projectName="  My  Service ", goVersion="1.23", httpPackage="gin")
        assert result.config.project_name == "my-service"
        assert result.warnings == [], f"Unexpected warnings: {result.warnings}"

    def test_unsafe_characters_are_replaced_with_warning(self, configure):
        result = configure(projectName="api@v2/x", goVersion="1.23", httpPackage="gin")
        assert result.config.project_name == "api-v2-x"
        assert any("normalized" in w for w in result.warnings)

    def test_canonical_project_name(self):
        assert canonical_project_name(" Hello World ") == "hello-world"


class TestBackendDefaults:
    def test_missing_go_version_defaults_to_newest(self, configure):
        result = configure(projectName="svc", httpPackage="gin")
        assert result.config.language_version == "1.23"
        assert any("Go version" in w for w in result.warnings)

    def test_unknown_go_version_defaults_with_warning(self, configure):
        result = configure(projectName="svc", goVersion="0.9", httpPackage="gin")
        assert result.config.language_version == "1.23"
        assert any("0.9" in w for w in result.warnings)

    def test_unknown_http_package_falls_back_to_gin(self, configure):
        result = configure(projectName="svc", goVersion="1.23", httpPackage="rocket")
        assert result.config.http_package.id == "gin"
        assert any("rocket" in w for w in result.warnings)

    def test_unknown_feature_is_dropped(self, configure):
        result = configure(projectName="svc", goVersion="1.23", httpPackage="gin", features=["docker", "telepathy"])
        assert [f.id for f in result.config.features] == ["docker"]
        assert any("telepathy" in w for w in result.warnings)

    def test_custom_packages_are_deduplicated_and_capped(self, configure):
        packages = [f"example.com/pkg{i}" for i in range(25)] + ["example.com/pkg0"]
        result = configure(projectName="svc", goVersion="1.23", httpPackage="gin", customPackages=packages)
        assert len(result.config.custom_packages) == 20
        assert result.config.custom_packages[0] == "example.com/pkg0"
        assert any("20" in w for w in result.warnings)


class TestDriverCompatibility:
    def test_compatibility_matrix(self):
        assert is_compatible("postgres", "gorm")
        assert is_compatible("bigquery", "database-sql")
        assert not is_compatible("bigquery", "gorm")
        assert not is_compatible("mongodb", "sqlx")
        assert is_compatible("redis", "redis-client")

    def test_incompatible_pair_keeps_database_without_driver(self, configure):
        result = configure(
            projectName="svc", goVersion="1.23", httpPackage="gin",
            databases=["mongodb"], driver_mongodb="gorm",
        )
        selection = result.config.databases[0]
        assert selection.database.id == "mongodb"
        assert selection.driver is None, "Incompatible driver must not be kept"
        assert any("does not support store" in w for w in result.warnings)

    def test_missing_driver_warns(self, configure):
        result = configure(projectName="svc", goVersion="1.23", httpPackage="gin", databases=["redis"])
        assert result.config.databases[0].driver is None
        assert any("No driver selected" in w for w in result.warnings)

    def test_duplicate_databases_collapse(self, configure):
        result = configure(
            projectName="svc", goVersion="1.23", httpPackage="gin",
            databases=["postgres", "postgres"], driver_postgres="gorm",
        )
        assert len(result.config.databases) == 1


class TestFrontend:
    def test_angular_forces_typescript(self, configure):
        result = configure(
            projectType="frontend", frontendProjectName="web",
            frontendFramework="angular", frontendLanguage="javascript", frontendBuildTool="angular-cli",
        )
        fe = result.config.frontend
        assert fe.language.id == "typescript"
        assert not any("language" in w.lower() for w in result.warnings), "Forcing TypeScript is silent"

    def test_vite_framework_with_angular_cli_uses_vite(self, configure):
        result = configure(
            projectType="frontend", frontendProjectName="web",
            frontendFramework="vue", frontendLanguage="typescript", frontendBuildTool="angular-cli",
        )
        assert result.config.frontend.build_tool.id == "vite"
        assert result.warnings, "Replacing the build tool should warn"

    def test_feature_for_other_framework_is_skipped(self, configure):
        result = configure(
            projectType="frontend", frontendProjectName="web",
            frontendFramework="vue", frontendLanguage="typescript", frontendBuildTool="vite",
            frontendFeatures=["react-router", "pinia"],
        )
        assert [f.id for f in result.config.frontend.features] == ["pinia"]
        assert any("React Router" in w for w in result.warnings)

    def test_missing_framework_defaults_to_react(self, configure):
        result = configure(projectType="frontend", frontendProjectName="web")
        assert result.config.frontend.framework.id == "react"
        assert result.config.frontend.language.id == "typescript"
        assert result.config.frontend.build_tool.id == "vite"
        assert result.config.frontend.linter.id == "none"

    def test_every_option_comes_from_catalog(self, configure, catalog):
        result = configure(
            projectType="frontend", frontendProjectName="web",
            frontendFramework="react", frontendLanguage="typescript", frontendBuildTool="vite",
            frontendLinter="eslint", frontendFeatures=["tailwind", "axios"],
        )
        fe = result.config.frontend
        assert fe.framework in catalog.frontend.frameworks
        assert fe.language in catalog.frontend.languages
        assert fe.linter in catalog.frontend.linters
        for feature in fe.features:
            assert feature in catalog.frontend.features
