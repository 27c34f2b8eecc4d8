from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Option(BaseModel):
    """A selectable catalog entry. Two options are equal when their ids match."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    import_path: Optional[str] = Field(default=None, alias="importPath")
    dependencies: Dict[str, List[str]] = Field(default_factory=dict)

    def __eq__(self, other):
        if isinstance(other, Option):
            return self.id == other.id
        return NotImplemented

    def __hash__(self):
        return hash(self.id)

    def extra_imports(self, context: str) -> List[str]:
        return list(self.dependencies.get(context, []))

    def applies_to(self, context: str) -> bool:
        """Frontend features list the frameworks they support as dependency keys."""
        if not self.dependencies:
            return True
        return "*" in self.dependencies or context in self.dependencies


class FrontendOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    frameworks: List[Option]
    languages: List[Option]
    build_tools: List[Option] = Field(alias="buildTools")
    linters: List[Option]
    features: List[Option]


class OptionCatalog(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language_versions: List[str] = Field(alias="goVersions")
    http: List[Option]
    databases: List[Option]
    db_drivers: List[Option] = Field(alias="dbDrivers")
    features: List[Option]
    frontend: FrontendOptions

    def labeled_lists(self) -> Dict[str, List[Option]]:
        return {
            "http": self.http,
            "databases": self.databases,
            "dbDrivers": self.db_drivers,
            "features": self.features,
            "frontend.frameworks": self.frontend.frameworks,
            "frontend.languages": self.frontend.languages,
            "frontend.buildTools": self.frontend.build_tools,
            "frontend.linters": self.frontend.linters,
            "frontend.features": self.frontend.features,
        }
