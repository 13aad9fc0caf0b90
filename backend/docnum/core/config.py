from __future__ import annotations

import logging
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger("docnum_config")


def _find_env_file() -> str | None:
    # Look for .env in current working directory or any parent of this file.
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)
    here = Path(__file__).resolve()
    for parent in [here.parent, *here.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)
    return None


_ENV_FILE_PATH = _find_env_file()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_ENV_FILE_PATH, extra="ignore", frozen=True)

    # App
    env: str = "dev"
    log_level: str = "INFO"

    # DB
    database_url: str

    # CORS
    cors_origins: str = Field(default="", alias="CORS_ORIGINS")

    # Numbering
    # Department whose numbers are counted department-wide instead of per type/location.
    aggregate_department_code: str = "BDS"
    numbering_timezone: str = "UTC"

    # Counter engine retry budget
    allocation_max_attempts: int = Field(default=5, ge=1)
    allocation_backoff_base_ms: int = Field(default=20, ge=0)
    allocation_backoff_max_ms: int = Field(default=500, ge=0)
    allocation_timeout_seconds: float = Field(default=10.0, gt=0)

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()  # singleton

if getattr(settings, "env", "dev").lower() == "dev":
    if _ENV_FILE_PATH:
        logger.info("Loaded .env from %s", _ENV_FILE_PATH)
    else:
        logger.info("No .env found; relying on environment variables only")
