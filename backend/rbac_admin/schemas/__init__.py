from .access import (
    Capabilities,
    FormAccess,
    ModuleAccess,
    RolAccess,
    RolFormPermissionDetail,
    UserAccess,
)
from .assignments import RolFormPermissionDto, RolUserDto
from .catalog import FormDto, FormModuleDto, ModuleDto, PermissionDto, RolDto
from .clients import ClientDto
from .users import UserDto, WorkerDto, WorkerLoginDto

__all__ = [
    "Capabilities",
    "FormAccess",
    "ModuleAccess",
    "RolAccess",
    "RolFormPermissionDetail",
    "UserAccess",
    "RolFormPermissionDto",
    "RolUserDto",
    "ClientDto",
    "FormDto",
    "FormModuleDto",
    "ModuleDto",
    "PermissionDto",
    "RolDto",
    "UserDto",
    "WorkerDto",
    "WorkerLoginDto",
]
