"""
Runtime settings for the access control core.

Values come from the environment (prefix ``RBAC_``) or a ``.env`` file and are
read once; the resulting object is cached for the process lifetime.
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import Role


class RbacSettings(BaseSettings):
    """Access control settings."""

    model_config = SettingsConfigDict(
        env_prefix="RBAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")

    # Policy source; built-in defaults are used when unset
    policy_file: Optional[Path] = Field(default=None)

    # Audit trail
    audit_enabled: bool = Field(default=True)
    audit_granted: bool = Field(default=False)

    # Roles whose principals may act outside their own tenant
    cross_tenant_roles: List[Role] = Field(default_factory=lambda: [Role.SUPER_ADMIN])

    @field_validator("cross_tenant_roles", mode="before")
    @classmethod
    def _split_roles(cls, value):
        if isinstance(value, str):
            return [item.strip().upper() for item in value.split(",") if item.strip()]
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"


@lru_cache()
def get_settings() -> RbacSettings:
    """Get cached settings instance."""
    return RbacSettings()
