"""
Configuration settings for the cart store.

Values are read once from the environment (or a ``.env`` file). The five
``POSTGRES_*``/``PGEDGE_*`` values are required; everything else has a default.
"""

from functools import lru_cache
from typing import Any, List

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cartstore.exceptions import ConfigurationError
from cartstore.schemas.hosts import HostCandidate, parse_host_list

class Settings(BaseSettings):
    """Cart store settings."""

    # Database
    POSTGRES_DATABASE_NAME: str
    PGEDGE_HOSTS_LIST: str
    POSTGRES_USERNAME: str
    POSTGRES_PASSWORD: SecretStr
    POSTGRES_TABLE_NAME: str
    DATABASE_DRIVER: str = "postgresql+psycopg"

    # Replica probing
    CART_PROBE_ATTEMPTS: int = Field(5, ge=1)
    CART_PROBE_INTERVAL: float = Field(1.0, ge=0)
    CART_PROBE_TIMEOUT: float = Field(5.0, gt=0)

    # Switch AddItem to a single atomic increment-or-insert statement
    CART_ATOMIC_ADD: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow"
    )

    def host_candidates(self) -> List[HostCandidate]:
        """Parse ``PGEDGE_HOSTS_LIST`` into host candidates."""
        return parse_host_list(self.PGEDGE_HOSTS_LIST)

def load_settings(**overrides: Any) -> Settings:
    """
    Build settings, turning missing or malformed values into a ConfigurationError.

    Only field names are reported, never the offending values, so a bad
    password cannot end up in a log line.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Missing or invalid configuration: {', '.join(fields)}"
        ) from None

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
