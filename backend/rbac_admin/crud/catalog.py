from sqlalchemy.ext.asyncio import AsyncSession

from ..models.form import Form
from ..models.form_module import FormModule
from ..models.module import Module
from ..models.permission import Permission
from ..models.rol import Rol
from .base import EntityStore


class RolStore(EntityStore[Rol]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Rol)


class FormStore(EntityStore[Form]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Form)

    async def get_by_code(self, code: str) -> Form | None:
        return await self.first_where(code=code)


class ModuleStore(EntityStore[Module]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Module)

    async def get_by_code(self, code: str) -> Module | None:
        return await self.first_where(code=code)


class PermissionStore(EntityStore[Permission]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Permission)


class FormModuleStore(EntityStore[FormModule]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, FormModule)

    async def get_by_module_and_form(self, module_id: int, form_id: int) -> FormModule | None:
        return await self.first_where(module_id=module_id, form_id=form_id)

    async def list_by_module(self, module_id: int) -> list[FormModule]:
        return await self.list_where(module_id=module_id)

    async def list_by_form(self, form_id: int) -> list[FormModule]:
        return await self.list_where(form_id=form_id)
