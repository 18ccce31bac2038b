"""
Read-side queries over the Rol / Form / Module / Permission / User graph.

Only active association rows (``delete_at IS NULL``) take part. Resolving
access for a rol with no grants, or for an unknown, inactive or deleted
rol, yields an empty result rather than an error.
"""
import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.access import (
    build_tree,
    capabilities_of,
    combine_by_form,
    combine_capabilities,
    visible_forms,
)
from ..errors import ServiceError
from ..models.form import Form
from ..models.form_module import FormModule
from ..models.module import Module
from ..models.permission import Permission
from ..models.rol import Rol
from ..models.rol_form_permission import RolFormPermission
from ..models.rol_user import RolUser
from ..schemas.access import (
    Capabilities,
    FormAccess,
    ModuleAccess,
    RolAccess,
    RolFormPermissionDetail,
    UserAccess,
)
from ..schemas.catalog import FormDto, ModuleDto, RolDto

logger = logging.getLogger(__name__)


def _usable_rol(query: Select[Any]) -> Select[Any]:
    return query.where(Rol.delete_at.is_(None), Rol.active.is_(True))


class PermissionGraph:
    entity_name = "PermissionGraph"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _rows(self, query: Select[Any], operation: str, subject_id: int) -> list[Any]:
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            logger.exception("%s failed for id %s", operation, subject_id)
            raise ServiceError(operation, self.entity_name, subject_id) from exc
        return list(result.all())

    async def get_permissions_by_rol(self, rol_id: int) -> list[RolFormPermissionDetail]:
        """Active grants of ``rol_id`` joined with their form and permission flags."""
        query = (
            select(RolFormPermission, Form, Permission)
            .select_from(RolFormPermission)
            .join(Rol, Rol.id == RolFormPermission.rol_id)
            .join(Form, Form.id == RolFormPermission.form_id)
            .join(Permission, Permission.id == RolFormPermission.permission_id)
            .where(
                RolFormPermission.rol_id == rol_id,
                RolFormPermission.delete_at.is_(None),
                Rol.delete_at.is_(None),
            )
            .order_by(RolFormPermission.id)
        )
        rows = await self._rows(query, "get_permissions_by_rol", rol_id)
        return [
            RolFormPermissionDetail(
                id=grant.id,
                rol_id=grant.rol_id,
                form_id=form.id,
                form_name=form.name,
                form_code=form.code,
                form_active=form.active,
                permission_id=permission.id,
                created_at=grant.created_at,
                **capabilities_of(permission).model_dump(),
            )
            for grant, form, permission in rows
        ]

    async def get_forms_for_module(self, module_id: int) -> list[FormDto]:
        query = (
            select(Form)
            .join(FormModule, FormModule.form_id == Form.id)
            .where(FormModule.module_id == module_id, FormModule.delete_at.is_(None))
            .order_by(Form.id)
            .distinct()
        )
        rows = await self._rows(query, "get_forms_for_module", module_id)
        return [FormDto.model_validate(form) for (form,) in rows]

    async def get_modules_for_form(self, form_id: int) -> list[ModuleDto]:
        query = (
            select(Module)
            .join(FormModule, FormModule.module_id == Module.id)
            .where(FormModule.form_id == form_id, FormModule.delete_at.is_(None))
            .order_by(Module.id)
            .distinct()
        )
        rows = await self._rows(query, "get_modules_for_form", form_id)
        return [ModuleDto.model_validate(module) for (module,) in rows]

    async def get_roles_for_user(self, user_id: int) -> list[RolDto]:
        query = _usable_rol(
            select(Rol)
            .join(RolUser, RolUser.rol_id == Rol.id)
            .where(RolUser.user_id == user_id, RolUser.delete_at.is_(None))
        ).order_by(Rol.id).distinct()
        rows = await self._rows(query, "get_roles_for_user", user_id)
        return [RolDto.model_validate(rol) for (rol,) in rows]

    async def effective_permission(self, rol_id: int, form_id: int) -> Capabilities:
        query = _usable_rol(
            select(Permission)
            .join(RolFormPermission, RolFormPermission.permission_id == Permission.id)
            .join(Rol, Rol.id == RolFormPermission.rol_id)
            .where(
                RolFormPermission.rol_id == rol_id,
                RolFormPermission.form_id == form_id,
                RolFormPermission.delete_at.is_(None),
            )
        )
        rows = await self._rows(query, "effective_permission", rol_id)
        return combine_capabilities(capabilities_of(permission) for (permission,) in rows)

    async def _grants_by_form(
        self, rol_ids: Iterable[int], operation: str, subject_id: int
    ) -> dict[int, Capabilities]:
        query = _usable_rol(
            select(RolFormPermission.form_id, Permission)
            .select_from(RolFormPermission)
            .join(Permission, Permission.id == RolFormPermission.permission_id)
            .join(Rol, Rol.id == RolFormPermission.rol_id)
            .where(
                RolFormPermission.rol_id.in_(list(rol_ids)),
                RolFormPermission.delete_at.is_(None),
            )
        )
        rows = await self._rows(query, operation, subject_id)
        return combine_by_form(
            (form_id, capabilities_of(permission)) for form_id, permission in rows
        )

    async def _tree(
        self, grants: dict[int, Capabilities], operation: str, subject_id: int
    ) -> tuple[list[ModuleAccess], list[FormAccess]]:
        if not grants:
            return [], []
        form_ids = list(grants)
        form_rows = await self._rows(
            select(Form).where(Form.id.in_(form_ids)), operation, subject_id
        )
        forms = visible_forms([form for (form,) in form_rows], grants)
        if not forms:
            return [], []
        binding_rows = await self._rows(
            select(Module, FormModule.form_id)
            .select_from(Module)
            .join(FormModule, FormModule.module_id == Module.id)
            .where(
                FormModule.form_id.in_([form.form_id for form in forms]),
                FormModule.delete_at.is_(None),
                Module.active.is_(True),
            )
            .order_by(Module.id, FormModule.form_id),
            operation,
            subject_id,
        )
        return build_tree(forms, [(module, form_id) for module, form_id in binding_rows])

    async def resolve_access(self, rol_id: int) -> RolAccess:
        """Navigation tree (module -> forms) the rol may open, with per-form affordances."""
        grants = await self._grants_by_form([rol_id], "resolve_access", rol_id)
        modules, ungrouped = await self._tree(grants, "resolve_access", rol_id)
        if not modules and not ungrouped:
            logger.info("Rol %s resolves to no access", rol_id)
        return RolAccess(rol_id=rol_id, modules=modules, ungrouped_forms=ungrouped)

    async def resolve_user_access(self, user_id: int) -> UserAccess:
        """Union of the access of every active rol assigned to ``user_id``."""
        roles = await self.get_roles_for_user(user_id)
        rol_ids = [rol.id for rol in roles]
        if not rol_ids:
            return UserAccess(user_id=user_id)
        grants = await self._grants_by_form(rol_ids, "resolve_user_access", user_id)
        modules, ungrouped = await self._tree(grants, "resolve_user_access", user_id)
        return UserAccess(
            user_id=user_id, rol_ids=rol_ids, modules=modules, ungrouped_forms=ungrouped
        )
