from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.assignments import RolFormPermissionStore, RolUserStore
from ..domain.invariants import require_positive_id, require_present
from ..models.rol_form_permission import RolFormPermission
from ..models.rol_user import RolUser
from ..schemas.assignments import RolFormPermissionDto, RolUserDto
from .base import EntityService, stamped_values


class RolUserMapper:
    entity_name = "RolUser"

    def validate(self, dto: RolUserDto) -> None:
        require_present(dto, self.entity_name)
        require_positive_id(dto.user_id, "user_id", "RolUser user_id")
        require_positive_id(dto.rol_id, "rol_id", "RolUser rol_id")

    def to_entity(self, dto: RolUserDto) -> RolUser:
        return RolUser(
            id=dto.id,
            user_id=dto.user_id,
            rol_id=dto.rol_id,
            **stamped_values(dto),
        )

    def to_dto(self, entity: RolUser) -> RolUserDto:
        return RolUserDto.model_validate(entity)


class RolFormPermissionMapper:
    entity_name = "RolFormPermission"

    def validate(self, dto: RolFormPermissionDto) -> None:
        require_present(dto, self.entity_name)
        require_positive_id(dto.rol_id, "rol_id", "RolFormPermission rol_id")
        require_positive_id(dto.form_id, "form_id", "RolFormPermission form_id")
        require_positive_id(
            dto.permission_id, "permission_id", "RolFormPermission permission_id"
        )

    def to_entity(self, dto: RolFormPermissionDto) -> RolFormPermission:
        return RolFormPermission(
            id=dto.id,
            rol_id=dto.rol_id,
            form_id=dto.form_id,
            permission_id=dto.permission_id,
            **stamped_values(dto),
        )

    def to_dto(self, entity: RolFormPermission) -> RolFormPermissionDto:
        return RolFormPermissionDto.model_validate(entity)


def build_rol_user_service(session: AsyncSession) -> EntityService[RolUserDto, RolUser]:
    return EntityService(RolUserStore(session), RolUserMapper())


def build_rol_form_permission_service(
    session: AsyncSession,
) -> EntityService[RolFormPermissionDto, RolFormPermission]:
    # Duplicate (rol_id, form_id) grants are accepted; see PermissionGraph
    return EntityService(RolFormPermissionStore(session), RolFormPermissionMapper())
