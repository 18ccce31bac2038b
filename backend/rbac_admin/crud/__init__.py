from .assignments import RolFormPermissionStore, RolUserStore
from .base import EntityStore
from .clients import ClientStore
from .catalog import FormModuleStore, FormStore, ModuleStore, PermissionStore, RolStore
from .users import UserStore
from .workers import WorkerLoginStore, WorkerStore

__all__ = [
    "EntityStore",
    "ClientStore",
    "UserStore",
    "WorkerStore",
    "WorkerLoginStore",
    "RolStore",
    "FormStore",
    "ModuleStore",
    "PermissionStore",
    "FormModuleStore",
    "RolUserStore",
    "RolFormPermissionStore",
]
