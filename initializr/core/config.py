from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "go-ctl-initializr"
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8080, validation_alias=AliasChoices("PORT", "API_PORT"))

    catalog_path: str = str(PACKAGE_DIR / "catalog" / "options.json")
    stats_database_url: str = "sqlite:///data/analytics.db"

    # "pkg.go.dev" queries the live index, "fallback" serves the built-in list
    search_provider: str = "pkg.go.dev"
    search_timeout: float = 5.0
    search_cache_ttl: int = 600
    pkg_go_dev_url: str = "https://pkg.go.dev/search"
    npm_registry_url: str = "https://registry.npmjs.org/-/v1/search"

settings = Settings()
