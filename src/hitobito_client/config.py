from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hitobito_client import __version__


class HitobitoSettings(BaseSettings):
    """Client settings loaded from environment variables with HITOBITO_ prefix."""

    # Instance
    base_url: str
    token: str
    # HTTP
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = f"hitobito-client/{__version__}"

    model_config = SettingsConfigDict(env_prefix="HITOBITO_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> HitobitoSettings:
    """Return cached client settings instance."""
    return HitobitoSettings()
