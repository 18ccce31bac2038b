"""
User, Worker and WorkerLogin mappers.

Passwords are write-only: ``to_dto`` never returns them, and an update that
leaves ``password`` unset or blank keeps the stored value.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.users import UserStore
from ..crud.workers import WorkerLoginStore, WorkerStore
from ..domain.invariants import (
    optional_positive_id,
    require_positive_id,
    require_present,
    require_text,
)
from ..models.user import User
from ..models.worker import Worker
from ..models.worker_login import WorkerLogin
from ..schemas.users import UserDto, WorkerDto, WorkerLoginDto
from .base import EntityService, UniqueRule, stamped_values


class UserMapper:
    entity_name = "User"

    def validate(self, dto: UserDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.name, "name", "User name")
        require_text(dto.email, "email", "User email")
        optional_positive_id(dto.worker_id, "worker_id", "User worker_id")

    def to_entity(self, dto: UserDto) -> User:
        return User(
            id=dto.id,
            name=dto.name,
            email=dto.email,
            password=dto.password,
            worker_id=dto.worker_id,
            **stamped_values(dto),
        )

    def to_dto(self, entity: User) -> UserDto:
        # password is redacted
        return UserDto(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            worker_id=entity.worker_id,
            created_at=entity.created_at,
            delete_at=entity.delete_at,
        )


class WorkerMapper:
    entity_name = "Worker"

    def validate(self, dto: WorkerDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.first_name, "first_name", "Worker first name")
        require_text(dto.last_name, "last_name", "Worker last name")
        require_text(dto.identity_document, "identity_document", "Worker identity document")
        require_text(dto.job_title, "job_title", "Worker job title")
        require_text(dto.email, "email", "Worker email")

    def to_entity(self, dto: WorkerDto) -> Worker:
        return Worker(
            id=dto.id,
            first_name=dto.first_name,
            last_name=dto.last_name,
            identity_document=dto.identity_document,
            job_title=dto.job_title,
            email=dto.email,
            phone=dto.phone,
            hire_date=dto.hire_date,
        )

    def to_dto(self, entity: Worker) -> WorkerDto:
        return WorkerDto.model_validate(entity)


class WorkerLoginMapper:
    entity_name = "WorkerLogin"

    def validate(self, dto: WorkerLoginDto) -> None:
        require_present(dto, self.entity_name)
        require_positive_id(dto.worker_id, "worker_id", "WorkerLogin worker_id")
        require_text(dto.username, "username", "WorkerLogin username")
        require_text(dto.status, "status", "WorkerLogin status")

    def to_entity(self, dto: WorkerLoginDto) -> WorkerLogin:
        return WorkerLogin(
            id=dto.id,
            worker_id=dto.worker_id,
            username=dto.username,
            password=dto.password,
            status=dto.status,
            **stamped_values(dto),
        )

    def to_dto(self, entity: WorkerLogin) -> WorkerLoginDto:
        # password is redacted
        return WorkerLoginDto(
            id=entity.id,
            worker_id=entity.worker_id,
            username=entity.username,
            status=entity.status,
            created_at=entity.created_at,
        )


def build_user_service(session: AsyncSession) -> EntityService[UserDto, User]:
    return EntityService(
        UserStore(session),
        UserMapper(),
        unique_rules=[UniqueRule(("email",)), UniqueRule(("worker_id",))],
        required_on_create=["password"],
        preserved_fields=["password"],
    )


def build_worker_service(session: AsyncSession) -> EntityService[WorkerDto, Worker]:
    return EntityService(
        WorkerStore(session),
        WorkerMapper(),
        unique_rules=[UniqueRule(("identity_document",))],
    )


def build_worker_login_service(
    session: AsyncSession,
) -> EntityService[WorkerLoginDto, WorkerLogin]:
    return EntityService(
        WorkerLoginStore(session),
        WorkerLoginMapper(),
        unique_rules=[UniqueRule(("username",))],
        required_on_create=["password"],
        preserved_fields=["password"],
    )
