from sqlalchemy.ext.asyncio import AsyncSession

from ..models.worker import Worker
from ..models.worker_login import WorkerLogin
from .base import EntityStore


class WorkerStore(EntityStore[Worker]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Worker)

    async def get_by_identity_document(self, identity_document: str) -> Worker | None:
        return await self.first_where(identity_document=identity_document)


class WorkerLoginStore(EntityStore[WorkerLogin]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, WorkerLogin)

    async def get_by_username(self, username: str) -> WorkerLogin | None:
        return await self.first_where(username=username)

    async def list_by_worker(self, worker_id: int) -> list[WorkerLogin]:
        return await self.list_where(worker_id=worker_id)
