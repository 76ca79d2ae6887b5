"""
Configuration and environment handling for the listing catalog.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class VerificationConfig(BaseModel):
    """Deferred verification settings."""
    delay_seconds: float = Field(
        default_factory=lambda: float(os.getenv("CATALOG_VERIFICATION_DELAY", "1.0")),
        ge=0,
        description="Seconds between create and the verification check",
    )
    enabled: bool = Field(
        default_factory=lambda: _env_bool("CATALOG_VERIFICATION_ENABLED", True),
        description="Schedule verification automatically on create",
    )


class SearchConfig(BaseModel):
    """Search and featured listing defaults."""
    default_limit: int = Field(
        default_factory=lambda: int(os.getenv("CATALOG_SEARCH_LIMIT", "20")),
        ge=0,
        description="Page size when a search does not give one",
    )
    featured_limit: int = Field(
        default_factory=lambda: int(os.getenv("CATALOG_FEATURED_LIMIT", "10")),
        ge=0,
        description="Number of featured listings returned by default",
    )


class Config(BaseModel):
    """Main configuration."""
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

    id_prefix: str = Field(default_factory=lambda: os.getenv("CATALOG_ID_PREFIX", "listing"))


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
