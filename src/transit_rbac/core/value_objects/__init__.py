"""Core value objects."""

from .principal import Principal, TenantContext

__all__ = ["Principal", "TenantContext"]
