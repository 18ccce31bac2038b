from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..services.permission_graph import PermissionGraph


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_permission_graph(db: AsyncSession = Depends(get_db)) -> PermissionGraph:
    return PermissionGraph(db)
