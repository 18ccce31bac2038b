"""
CRUD router factory.

Every entity exposes the same six endpoints over its ``EntityService``:

    POST   /                 create          201
    GET    /                 list            200
    GET    /{id}             read            200 / 404
    PUT    /                 update          204 / 404
    DELETE /{id}             soft delete     204 / 404
    DELETE /{id}/permanent   purge           204 / 404
"""
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import EntityNotFound
from ..services.base import EntityService
from .dependencies import get_db

ServiceFactory = Callable[[AsyncSession], EntityService[Any, Any]]


def build_entity_router(
    prefix: str,
    tag: str,
    dto_type: type[BaseModel],
    service_factory: ServiceFactory,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    def get_service(db: AsyncSession = Depends(get_db)) -> EntityService[Any, Any]:
        return service_factory(db)

    @router.post("/", response_model=dto_type, status_code=status.HTTP_201_CREATED)
    async def create_entity(
        payload: dto_type,  # type: ignore[valid-type]
        service: EntityService[Any, Any] = Depends(get_service),
    ):
        return await service.create(payload)

    @router.get("/", response_model=list[dto_type])  # type: ignore[valid-type]
    async def list_entities(service: EntityService[Any, Any] = Depends(get_service)):
        return await service.get_all()

    @router.get("/{entity_id}", response_model=dto_type)
    async def get_entity(
        entity_id: int,
        service: EntityService[Any, Any] = Depends(get_service),
    ):
        return await service.get_required(entity_id)

    @router.put("/", status_code=status.HTTP_204_NO_CONTENT)
    async def update_entity(
        payload: dto_type,  # type: ignore[valid-type]
        service: EntityService[Any, Any] = Depends(get_service),
    ) -> Response:
        if not await service.update(payload):
            raise EntityNotFound(service.entity_name, payload.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(
        entity_id: int,
        service: EntityService[Any, Any] = Depends(get_service),
    ) -> Response:
        if not await service.delete(entity_id):
            raise EntityNotFound(service.entity_name, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{entity_id}/permanent", status_code=status.HTTP_204_NO_CONTENT)
    async def purge_entity(
        entity_id: int,
        service: EntityService[Any, Any] = Depends(get_service),
    ) -> Response:
        if not await service.permanent_delete(entity_id):
            raise EntityNotFound(service.entity_name, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
