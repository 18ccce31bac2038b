"""
Generic async persistence gateway for one model.

Every CRUD operation commits its own unit of work. Failures roll the session
back and surface as PersistenceError (IntegrityViolation for constraint
violations), so callers never observe partial writes.
"""
import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect as sa_inspect

from ..errors import IntegrityViolation, PersistenceError
from ..models.base import Base, supports_soft_delete

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

IMMUTABLE_COLUMNS = frozenset({"id", "created_at", "delete_at"})


def classify_integrity_error(exc: IntegrityError) -> str:
    text = str(exc.orig).lower()
    if "unique" in text or "duplicate key" in text:
        return "unique"
    if "foreign key" in text:
        return "foreign_key"
    return "other"


class EntityStore(Generic[ModelT]):
    def __init__(self, session: AsyncSession, model: type[ModelT]):
        self.session = session
        self.model = model
        self.soft_delete = supports_soft_delete(model)

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _select(self, include_deleted: bool = False) -> Select[tuple[ModelT]]:
        query = select(self.model)
        if self.soft_delete and not include_deleted:
            query = query.where(self.model.delete_at.is_(None))
        return query

    def _mutable_columns(self) -> list[str]:
        return [
            attr.key
            for attr in sa_inspect(self.model).column_attrs
            if attr.key not in IMMUTABLE_COLUMNS
        ]

    async def _commit(self, operation: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("%s rejected by a constraint on %s: %s", operation, self.entity_name, exc.orig)
            raise IntegrityViolation(
                operation,
                self.entity_name,
                kind=classify_integrity_error(exc),
                detail=str(exc.orig),
            ) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("%s failed on %s", operation, self.entity_name, exc_info=exc)
            raise PersistenceError(operation, self.entity_name) from exc

    async def _fetch(self, query: Select[Any], operation: str) -> list[Any]:
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("%s failed on %s", operation, self.entity_name, exc_info=exc)
            raise PersistenceError(operation, self.entity_name) from exc
        return list(result.scalars().all())

    async def create(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self._commit("create")
        await self.session.refresh(entity)
        return entity

    async def get_all(self, include_deleted: bool = False) -> list[ModelT]:
        return await self._fetch(
            self._select(include_deleted).order_by(self.model.id), "get_all"
        )

    async def get_by_id(self, entity_id: int, include_deleted: bool = False) -> ModelT | None:
        rows = await self._fetch(
            self._select(include_deleted).where(self.model.id == entity_id), "get_by_id"
        )
        return rows[0] if rows else None

    async def list_where(self, **filters: Any) -> list[ModelT]:
        query = self._select().filter_by(**filters).order_by(self.model.id)
        return await self._fetch(query, "list_where")

    async def first_where(self, **filters: Any) -> ModelT | None:
        query = self._select().filter_by(**filters).order_by(self.model.id).limit(1)
        rows = await self._fetch(query, "first_where")
        return rows[0] if rows else None

    async def exists_matching(
        self, values: Mapping[str, Any], exclude_id: int | None = None
    ) -> bool:
        query = select(func.count()).select_from(self.model).filter_by(**values)
        if self.soft_delete:
            query = query.where(self.model.delete_at.is_(None))
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        try:
            count = await self.session.scalar(query)
        except SQLAlchemyError as exc:
            logger.error("exists_matching failed on %s", self.entity_name, exc_info=exc)
            raise PersistenceError("exists_matching", self.entity_name) from exc
        return bool(count)

    async def update(self, entity: ModelT) -> bool:
        """Overwrite every mutable column of the stored row with ``entity``'s values."""
        current = await self.get_by_id(entity.id)
        if current is None:
            return False
        if current is not entity:
            for key in self._mutable_columns():
                setattr(current, key, getattr(entity, key))
        await self._commit("update")
        return True

    async def delete(self, entity_id: int) -> bool:
        if not self.soft_delete:
            return await self.permanent_delete(entity_id)
        current = await self.get_by_id(entity_id)
        if current is None:
            return False
        current.mark_deleted()
        await self._commit("delete")
        return True

    async def permanent_delete(self, entity_id: int) -> bool:
        current = await self.get_by_id(entity_id, include_deleted=True)
        if current is None:
            return False
        # Core DELETE so ON DELETE rules run in the database, not as lazy loads
        statement = (
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        try:
            await self.session.execute(statement)
        except IntegrityError as exc:
            await self.session.rollback()
            raise IntegrityViolation(
                "permanent_delete",
                self.entity_name,
                kind=classify_integrity_error(exc),
                detail=str(exc.orig),
            ) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("permanent_delete failed on %s", self.entity_name, exc_info=exc)
            raise PersistenceError("permanent_delete", self.entity_name) from exc
        self.session.expunge(current)
        await self._commit("permanent_delete")
        return True
