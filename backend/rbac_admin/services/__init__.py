from .assignments import build_rol_form_permission_service, build_rol_user_service
from .base import EntityMapper, EntityService, UniqueRule
from .catalog import (
    build_form_module_service,
    build_form_service,
    build_module_service,
    build_permission_service,
    build_rol_service,
)
from .clients import build_client_service
from .permission_graph import PermissionGraph
from .users import build_user_service, build_worker_login_service, build_worker_service

__all__ = [
    "EntityMapper",
    "EntityService",
    "PermissionGraph",
    "UniqueRule",
    "build_client_service",
    "build_form_module_service",
    "build_form_service",
    "build_module_service",
    "build_permission_service",
    "build_rol_form_permission_service",
    "build_rol_service",
    "build_rol_user_service",
    "build_user_service",
    "build_worker_login_service",
    "build_worker_service",
]
