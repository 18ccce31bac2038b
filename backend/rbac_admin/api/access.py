"""Read-only endpoints over the permission graph."""
from fastapi import APIRouter, Depends

from ..schemas.access import Capabilities, RolAccess, RolFormPermissionDetail, UserAccess
from ..schemas.catalog import FormDto, ModuleDto, RolDto
from ..services.permission_graph import PermissionGraph
from .dependencies import get_permission_graph

router = APIRouter(tags=["access"])


@router.get("/roles/{rol_id}/permissions", response_model=list[RolFormPermissionDetail])
async def list_rol_permissions(
    rol_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.get_permissions_by_rol(rol_id)


@router.get("/roles/{rol_id}/access", response_model=RolAccess)
async def get_rol_access(
    rol_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    """
    Navigation tree for a rol.

    An unknown or inactive rol yields an empty tree, not a 404.
    """
    return await graph.resolve_access(rol_id)


@router.get("/roles/{rol_id}/forms/{form_id}/permission", response_model=Capabilities)
async def get_effective_permission(
    rol_id: int,
    form_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.effective_permission(rol_id, form_id)


@router.get("/users/{user_id}/roles", response_model=list[RolDto])
async def list_user_roles(
    user_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.get_roles_for_user(user_id)


@router.get("/users/{user_id}/access", response_model=UserAccess)
async def get_user_access(
    user_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.resolve_user_access(user_id)


@router.get("/modules/{module_id}/forms", response_model=list[FormDto])
async def list_module_forms(
    module_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.get_forms_for_module(module_id)


@router.get("/forms/{form_id}/modules", response_model=list[ModuleDto])
async def list_form_modules(
    form_id: int,
    graph: PermissionGraph = Depends(get_permission_graph),
):
    return await graph.get_modules_for_form(form_id)
