from sqlalchemy.ext.asyncio import AsyncSession

from ..models.rol_form_permission import RolFormPermission
from ..models.rol_user import RolUser
from .base import EntityStore


class RolUserStore(EntityStore[RolUser]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, RolUser)

    async def list_by_user(self, user_id: int) -> list[RolUser]:
        return await self.list_where(user_id=user_id)

    async def list_by_rol(self, rol_id: int) -> list[RolUser]:
        return await self.list_where(rol_id=rol_id)


class RolFormPermissionStore(EntityStore[RolFormPermission]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, RolFormPermission)

    async def list_by_rol(self, rol_id: int) -> list[RolFormPermission]:
        return await self.list_where(rol_id=rol_id)

    async def list_by_rol_and_form(self, rol_id: int, form_id: int) -> list[RolFormPermission]:
        return await self.list_where(rol_id=rol_id, form_id=form_id)
