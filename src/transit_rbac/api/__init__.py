"""FastAPI integration for transit-rbac."""

from .dependencies import (
    install_access_control,
    get_access_control,
    get_current_principal,
    require_permission,
    require_any_role,
    require_all_roles,
)
from .errors import register_exception_handlers, rbac_exception_handler

__all__ = [
    "install_access_control",
    "get_access_control",
    "get_current_principal",
    "require_permission",
    "require_any_role",
    "require_all_roles",
    "register_exception_handlers",
    "rbac_exception_handler",
]
