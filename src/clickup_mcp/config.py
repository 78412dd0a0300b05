"""Gateway configuration, loaded once from the environment."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


CLICKUP_API_BASE = "https://api.clickup.com/api/v2"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore", populate_by_name=True, frozen=True)

    # ClickUp
    clickup_api_token: Optional[str] = Field(default=None, validation_alias="CLICKUP_API_TOKEN")
    clickup_team_id: Optional[str] = Field(default=None, validation_alias="CLICKUP_TEAM_ID")
    clickup_api_base: str = Field(default=CLICKUP_API_BASE, validation_alias="CLICKUP_API_BASE")
    # No local timeout unless explicitly configured
    request_timeout: Optional[float] = Field(default=None, validation_alias="CLICKUP_REQUEST_TIMEOUT")

    # Runtime
    port: int = Field(default=3001, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()
