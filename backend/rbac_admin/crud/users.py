from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User
from .base import EntityStore


class UserStore(EntityStore[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        return await self.first_where(email=email)

    async def get_by_worker_id(self, worker_id: int) -> User | None:
        return await self.first_where(worker_id=worker_id)
