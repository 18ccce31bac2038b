"""
Generic business layer shared by every entity.

An ``EntityService`` is composed from an ``EntityStore`` and an
``EntityMapper``. The mapper owns the per-entity validation and DTO/model
translation; the service owns the operation flow:

- create: validate -> uniqueness probe -> map -> persist -> map back
- update: validate -> existence -> uniqueness probe (own id excluded) -> map -> persist
- delete / permanent_delete: existence -> delegate

Validation errors are raised before any I/O and never wrapped. Not-found on
update/delete is reported as ``False``. Unique-constraint violations become
``ConflictError``; every other failure is logged and re-raised as
``ServiceError`` with the original exception as its cause.
"""
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel

from ..crud.base import EntityStore
from ..errors import (
    ConflictError,
    EntityNotFound,
    IntegrityViolation,
    PersistenceError,
    ServiceError,
    ValidationError,
)
from ..models.base import Base

logger = logging.getLogger(__name__)

DtoT = TypeVar("DtoT", bound=BaseModel)
ModelT = TypeVar("ModelT", bound=Base)

SERVER_STAMPED_FIELDS = ("created_at", "delete_at")


class EntityMapper(Protocol[DtoT, ModelT]):
    entity_name: str

    def validate(self, dto: DtoT) -> None:
        ...

    def to_entity(self, dto: DtoT) -> ModelT:
        ...

    def to_dto(self, entity: ModelT) -> DtoT:
        ...


@dataclass(frozen=True)
class UniqueRule:
    """Fields whose combined value must be unique among active rows."""

    fields: tuple[str, ...]

    @property
    def label(self) -> str:
        return "+".join(self.fields)

    def values(self, dto: BaseModel) -> dict[str, Any]:
        return {field: getattr(dto, field) for field in self.fields}

    def describe(self, values: Mapping[str, Any]) -> Any:
        if len(self.fields) == 1:
            return values[self.fields[0]]
        return ", ".join(f"{field}={values[field]}" for field in self.fields)


def stamped_values(dto: BaseModel) -> dict[str, Any]:
    """Timestamps present on ``dto``; absent ones are left to the database default."""
    return {
        field: getattr(dto, field)
        for field in SERVER_STAMPED_FIELDS
        if field in type(dto).model_fields and getattr(dto, field) is not None
    }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _rule_named_in(rules: Iterable[UniqueRule], detail: str) -> UniqueRule | None:
    """The rule whose fields all appear as words in a driver constraint message."""
    for rule in rules:
        if detail and all(re.search(rf"\b{re.escape(field)}\b", detail) for field in rule.fields):
            return rule
    return None


def _fresh_copy(dto: DtoT) -> DtoT:
    # ids and timestamps on a create payload are assigned by the database
    reset = {"id": None}
    reset.update({field: None for field in SERVER_STAMPED_FIELDS if field in type(dto).model_fields})
    return dto.model_copy(update=reset)


class EntityService(Generic[DtoT, ModelT]):
    def __init__(
        self,
        store: EntityStore[ModelT],
        mapper: EntityMapper[DtoT, ModelT],
        *,
        unique_rules: Iterable[UniqueRule] = (),
        required_on_create: Iterable[str] = (),
        preserved_fields: Iterable[str] = (),
    ):
        self.store = store
        self.mapper = mapper
        self.unique_rules = tuple(unique_rules)
        self.required_on_create = tuple(required_on_create)
        # Fields that keep their stored value when an update leaves them unset or blank
        self.preserved_fields = tuple(preserved_fields)

    @property
    def entity_name(self) -> str:
        return self.mapper.entity_name

    def map_to_dto_list(self, entities: Iterable[ModelT]) -> list[DtoT]:
        return [self.mapper.to_dto(entity) for entity in entities]

    def _check_required_on_create(self, dto: DtoT) -> None:
        for field in self.required_on_create:
            if _is_blank(getattr(dto, field)):
                raise ValidationError(
                    field, f"{self.entity_name} {field} is required when creating"
                )

    async def _check_unique(self, dto: DtoT, exclude_id: int | None = None) -> None:
        for rule in self.unique_rules:
            values = rule.values(dto)
            if any(value is None for value in values.values()):
                continue
            if await self.store.exists_matching(values, exclude_id=exclude_id):
                logger.warning(
                    "%s conflict on %s=%s", self.entity_name, rule.label, rule.describe(values)
                )
                raise ConflictError(rule.label, rule.describe(values))

    async def _conflict_from(
        self, exc: IntegrityViolation, dto: DtoT, exclude_id: int | None = None
    ) -> ConflictError | None:
        if exc.kind == "foreign_key":
            return ConflictError("reference", "a referenced record does not exist")
        if exc.kind != "unique":
            return None
        # The probe passed, so a concurrent writer won the race; probe again
        # to name the rule it broke.
        try:
            await self._check_unique(dto, exclude_id=exclude_id)
        except ConflictError as conflict:
            return conflict
        except PersistenceError:
            logger.warning("re-probe failed for %s", self.entity_name, exc_info=True)
        rule = _rule_named_in(self.unique_rules, exc.detail)
        if rule is not None:
            return ConflictError(rule.label, rule.describe(rule.values(dto)))
        return ConflictError("record", "duplicate")

    async def create(self, dto: DtoT) -> DtoT:
        self.mapper.validate(dto)
        self._check_required_on_create(dto)
        try:
            await self._check_unique(dto)
            created = await self.store.create(self.mapper.to_entity(_fresh_copy(dto)))
        except ConflictError:
            raise
        except IntegrityViolation as exc:
            conflict = await self._conflict_from(exc, dto)
            if conflict is None:
                logger.exception("create failed for %s", self.entity_name)
                raise ServiceError("create", self.entity_name) from exc
            raise conflict from exc
        except Exception as exc:
            logger.exception("create failed for %s", self.entity_name)
            raise ServiceError("create", self.entity_name) from exc
        logger.info("%s %s created", self.entity_name, created.id)
        return self.mapper.to_dto(created)

    async def get_all(self) -> list[DtoT]:
        try:
            entities = await self.store.get_all()
        except PersistenceError as exc:
            logger.exception("get_all failed for %s", self.entity_name)
            raise ServiceError("get_all", self.entity_name) from exc
        return self.map_to_dto_list(entities)

    async def get_by_id(self, entity_id: int) -> DtoT | None:
        try:
            entity = await self.store.get_by_id(entity_id)
        except PersistenceError as exc:
            logger.exception("get_by_id failed for %s %s", self.entity_name, entity_id)
            raise ServiceError("get_by_id", self.entity_name, entity_id) from exc
        return None if entity is None else self.mapper.to_dto(entity)

    async def get_required(self, entity_id: int) -> DtoT:
        dto = await self.get_by_id(entity_id)
        if dto is None:
            raise EntityNotFound(self.entity_name, entity_id)
        return dto

    async def update(self, dto: DtoT) -> bool:
        self.mapper.validate(dto)
        entity_id = getattr(dto, "id", None)
        if entity_id is None:
            raise ValidationError("id", f"{self.entity_name} id is required for updates")
        try:
            current = await self.store.get_by_id(entity_id)
            if current is None:
                logger.warning("%s %s not found for update", self.entity_name, entity_id)
                return False
            await self._check_unique(dto, exclude_id=entity_id)
            entity = self.mapper.to_entity(dto)
            for field in self.preserved_fields:
                if _is_blank(getattr(entity, field)):
                    setattr(entity, field, getattr(current, field))
            updated = await self.store.update(entity)
        except ConflictError:
            raise
        except IntegrityViolation as exc:
            conflict = await self._conflict_from(exc, dto, exclude_id=entity_id)
            if conflict is None:
                logger.exception("update failed for %s %s", self.entity_name, entity_id)
                raise ServiceError("update", self.entity_name, entity_id) from exc
            raise conflict from exc
        except Exception as exc:
            logger.exception("update failed for %s %s", self.entity_name, entity_id)
            raise ServiceError("update", self.entity_name, entity_id) from exc
        return updated

    async def _exists(self, entity_id: int, operation: str, include_deleted: bool = False) -> bool:
        try:
            current = await self.store.get_by_id(entity_id, include_deleted=include_deleted)
        except PersistenceError:
            logger.warning(
                "%s existence check failed for %s %s", operation, self.entity_name, entity_id,
                exc_info=True,
            )
            return False
        if current is None:
            logger.warning("%s %s not found for %s", self.entity_name, entity_id, operation)
            return False
        return True

    async def delete(self, entity_id: int) -> bool:
        if not await self._exists(entity_id, "delete"):
            return False
        try:
            deleted = await self.store.delete(entity_id)
        except PersistenceError as exc:
            logger.exception("delete failed for %s %s", self.entity_name, entity_id)
            raise ServiceError("delete", self.entity_name, entity_id) from exc
        return deleted

    async def permanent_delete(self, entity_id: int) -> bool:
        if not await self._exists(entity_id, "permanent_delete", include_deleted=True):
            return False
        try:
            purged = await self.store.permanent_delete(entity_id)
        except PersistenceError as exc:
            logger.exception("permanent_delete failed for %s %s", self.entity_name, entity_id)
            raise ServiceError("permanent_delete", self.entity_name, entity_id) from exc
        if purged:
            logger.info("%s %s permanently deleted", self.entity_name, entity_id)
        return purged
