from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.catalog import FormModuleStore, FormStore, ModuleStore, PermissionStore, RolStore
from ..domain.invariants import require_positive_id, require_present, require_text
from ..models.form import Form
from ..models.form_module import FormModule
from ..models.module import Module
from ..models.permission import Permission
from ..models.rol import Rol
from ..schemas.catalog import FormDto, FormModuleDto, ModuleDto, PermissionDto, RolDto
from .base import EntityService, UniqueRule, stamped_values


class RolMapper:
    entity_name = "Rol"

    def validate(self, dto: RolDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.name, "name", "Rol name")

    def to_entity(self, dto: RolDto) -> Rol:
        return Rol(
            id=dto.id,
            name=dto.name,
            description=dto.description,
            active=dto.active,
            **stamped_values(dto),
        )

    def to_dto(self, entity: Rol) -> RolDto:
        return RolDto.model_validate(entity)


class FormMapper:
    entity_name = "Form"

    def validate(self, dto: FormDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.name, "name", "Form name")
        require_text(dto.code, "code", "Form code")

    def to_entity(self, dto: FormDto) -> Form:
        return Form(
            id=dto.id,
            name=dto.name,
            code=dto.code,
            description=dto.description,
            active=dto.active,
            **stamped_values(dto),
        )

    def to_dto(self, entity: Form) -> FormDto:
        return FormDto.model_validate(entity)


class ModuleMapper:
    entity_name = "Module"

    def validate(self, dto: ModuleDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.code, "code", "Module code")

    def to_entity(self, dto: ModuleDto) -> Module:
        return Module(
            id=dto.id,
            code=dto.code,
            name=dto.name,
            description=dto.description,
            active=dto.active,
            **stamped_values(dto),
        )

    def to_dto(self, entity: Module) -> ModuleDto:
        return ModuleDto.model_validate(entity)


class PermissionMapper:
    entity_name = "Permission"

    def validate(self, dto: PermissionDto) -> None:
        # Every flag combination is valid, including all-false
        require_present(dto, self.entity_name)

    def to_entity(self, dto: PermissionDto) -> Permission:
        return Permission(
            id=dto.id,
            can_read=dto.can_read,
            can_create=dto.can_create,
            can_update=dto.can_update,
            can_delete=dto.can_delete,
            **stamped_values(dto),
        )

    def to_dto(self, entity: Permission) -> PermissionDto:
        return PermissionDto.model_validate(entity)


class FormModuleMapper:
    entity_name = "FormModule"

    def validate(self, dto: FormModuleDto) -> None:
        require_present(dto, self.entity_name)
        require_positive_id(dto.module_id, "module_id", "FormModule module_id")
        require_positive_id(dto.form_id, "form_id", "FormModule form_id")

    def to_entity(self, dto: FormModuleDto) -> FormModule:
        return FormModule(
            id=dto.id,
            form_id=dto.form_id,
            module_id=dto.module_id,
            **stamped_values(dto),
        )

    def to_dto(self, entity: FormModule) -> FormModuleDto:
        return FormModuleDto.model_validate(entity)


def build_rol_service(session: AsyncSession) -> EntityService[RolDto, Rol]:
    return EntityService(RolStore(session), RolMapper())


def build_form_service(session: AsyncSession) -> EntityService[FormDto, Form]:
    return EntityService(
        FormStore(session), FormMapper(), unique_rules=[UniqueRule(("code",))]
    )


def build_module_service(session: AsyncSession) -> EntityService[ModuleDto, Module]:
    return EntityService(
        ModuleStore(session), ModuleMapper(), unique_rules=[UniqueRule(("code",))]
    )


def build_permission_service(
    session: AsyncSession,
) -> EntityService[PermissionDto, Permission]:
    return EntityService(PermissionStore(session), PermissionMapper())


def build_form_module_service(
    session: AsyncSession,
) -> EntityService[FormModuleDto, FormModule]:
    # a module may bind a given form only once while the binding is active
    return EntityService(
        FormModuleStore(session),
        FormModuleMapper(),
        unique_rules=[UniqueRule(("module_id", "form_id"))],
    )
