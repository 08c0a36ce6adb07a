"""
FastAPI authorization dependencies.

The upstream authentication layer verifies the token and stores a Principal
on ``request.state.principal``; these dependencies only authorize.

Usage:
    install_access_control(app, create_access_control())

    @app.get("/vehicles", dependencies=[Depends(require_permission("vehicles", "read"))])
    async def list_vehicles(): ...
"""
from typing import Callable, Iterable, Union

from fastapi import Depends, FastAPI, HTTPException, Request, status

from ..config.constants import Action, ResourceSection, Role
from ..core.value_objects import Principal
from ..features.permissions.services import AccessControlService, get_permission_catalog
from .errors import register_exception_handlers


def install_access_control(app: FastAPI, service: AccessControlService) -> None:
    """Attach the access control service to an application."""
    app.state.access_control = service
    register_exception_handlers(app)


def get_access_control(request: Request) -> AccessControlService:
    """Get the application's access control service."""
    service = getattr(request.app.state, "access_control", None)
    if service is None:
        raise RuntimeError("Access control is not installed; call install_access_control(app, service)")
    return service


async def get_current_principal(request: Request) -> Principal:
    """Principal resolved by the authentication layer; 401 when absent."""
    principal = getattr(request.state, "principal", None)
    if not isinstance(principal, Principal):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


def require_permission(
    section: Union[ResourceSection, str],
    action: Union[Action, str],
) -> Callable:
    """
    Dependency factory for requiring a specific permission.

    The permission is built (and validated) when the route is declared, so a
    typo in a section or action fails at import time rather than per request.
    """
    permission = get_permission_catalog().permission(section, action)

    async def permission_dependency(
        principal: Principal = Depends(get_current_principal),
        access: AccessControlService = Depends(get_access_control),
    ) -> Principal:
        decision = access.check_permission(principal, permission)
        if not decision.granted:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "Insufficient permissions", "required": permission.code},
            )
        return principal

    return permission_dependency


def require_any_role(roles: Iterable[Union[Role, str]]) -> Callable:
    """Dependency factory for requiring at least one of the given roles."""
    required = [Role(role) for role in roles]

    async def role_dependency(
        principal: Principal = Depends(get_current_principal),
        access: AccessControlService = Depends(get_access_control),
    ) -> Principal:
        if not access.has_any_role(principal, required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Insufficient role",
                    "required": [role.value for role in required],
                    "current": sorted(role.value for role in principal.roles),
                },
            )
        return principal

    return role_dependency


def require_all_roles(roles: Iterable[Union[Role, str]]) -> Callable:
    """Dependency factory for requiring every one of the given roles."""
    required = [Role(role) for role in roles]

    async def role_dependency(
        principal: Principal = Depends(get_current_principal),
        access: AccessControlService = Depends(get_access_control),
    ) -> Principal:
        if not access.has_all_roles(principal, required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Missing required roles",
                    "required": [role.value for role in required],
                    "current": sorted(role.value for role in principal.roles),
                },
            )
        return principal

    return role_dependency
