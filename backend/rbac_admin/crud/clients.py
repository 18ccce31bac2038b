from sqlalchemy.ext.asyncio import AsyncSession

from ..models.client import Client
from .base import EntityStore


class ClientStore(EntityStore[Client]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Client)

    async def get_by_identity_document(self, identity_document: str) -> Client | None:
        return await self.first_where(identity_document=identity_document)
