from fastapi import APIRouter

from ..schemas.assignments import RolFormPermissionDto, RolUserDto
from ..schemas.catalog import FormDto, FormModuleDto, ModuleDto, PermissionDto, RolDto
from ..schemas.clients import ClientDto
from ..schemas.users import UserDto, WorkerDto, WorkerLoginDto
from ..services.assignments import build_rol_form_permission_service, build_rol_user_service
from ..services.catalog import (
    build_form_module_service,
    build_form_service,
    build_module_service,
    build_permission_service,
    build_rol_service,
)
from ..services.clients import build_client_service
from ..services.users import (
    build_user_service,
    build_worker_login_service,
    build_worker_service,
)
from . import access
from .crud import build_entity_router

router = APIRouter(prefix="/api")

_entity_routers = [
    build_entity_router("/users", "users", UserDto, build_user_service),
    build_entity_router("/workers", "workers", WorkerDto, build_worker_service),
    build_entity_router("/worker-logins", "worker-logins", WorkerLoginDto, build_worker_login_service),
    build_entity_router("/clients", "clients", ClientDto, build_client_service),
    build_entity_router("/roles", "roles", RolDto, build_rol_service),
    build_entity_router("/forms", "forms", FormDto, build_form_service),
    build_entity_router("/modules", "modules", ModuleDto, build_module_service),
    build_entity_router("/permissions", "permissions", PermissionDto, build_permission_service),
    build_entity_router("/form-modules", "form-modules", FormModuleDto, build_form_module_service),
    build_entity_router("/rol-users", "rol-users", RolUserDto, build_rol_user_service),
    build_entity_router(
        "/rol-form-permissions",
        "rol-form-permissions",
        RolFormPermissionDto,
        build_rol_form_permission_service,
    ),
]

_access_routers = [
    access.router,
]

for _router in [*_access_routers, *_entity_routers]:
    router.include_router(_router)
