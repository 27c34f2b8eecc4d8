from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from initializr.schemas.options import Option


class DatabaseSelection(BaseModel):
    """A selected store and the driver that talks to it.

    ``driver`` is None when the submitted driver was missing or cannot serve
    the store; the database still gets a compose service but no storage layer.
    """
    model_config = ConfigDict(frozen=True)

    database: Option
    driver: Optional[Option] = None


class FrontendConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    framework: Option
    language: Option
    build_tool: Option
    linter: Option
    features: List[Option] = Field(default_factory=list)
    custom_packages: List[str] = Field(default_factory=list)

    @property
    def is_typescript(self) -> bool:
        return self.language.id == "typescript"

    def has_feature(self, feature_id: str) -> bool:
        return any(feature.id == feature_id for feature in self.features)


class ProjectConfig(BaseModel):
    """Validated input to generation. Built by the validator, never by handlers."""
    model_config = ConfigDict(frozen=True)

    project_name: str
    language_version: str
    project_type: Literal["backend", "frontend"] = "backend"
    http_package: Optional[Option] = None
    databases: List[DatabaseSelection] = Field(default_factory=list)
    features: List[Option] = Field(default_factory=list)
    custom_packages: List[str] = Field(default_factory=list)
    frontend: Optional[FrontendConfig] = None

    @property
    def is_frontend(self) -> bool:
        return self.project_type == "frontend"

    def has_feature(self, feature_id: str) -> bool:
        if self.is_frontend and self.frontend is not None:
            return self.frontend.has_feature(feature_id)
        return any(feature.id == feature_id for feature in self.features)

    def storage_groups(self) -> Dict[str, List[DatabaseSelection]]:
        """Group compatible selections by driver id, in first-seen order."""
        groups: Dict[str, List[DatabaseSelection]] = {}
        for selection in self.databases:
            if selection.driver is None:
                continue
            groups.setdefault(selection.driver.id, []).append(selection)
        return groups

    def drivers(self) -> List[Option]:
        seen: Dict[str, Option] = {}
        for selection in self.databases:
            if selection.driver is not None and selection.driver.id not in seen:
                seen[selection.driver.id] = selection.driver
        return list(seen.values())

    def has_driver(self, driver_id: str) -> bool:
        return any(driver.id == driver_id for driver in self.drivers())
