from .base import Base, LifecycleState, SoftDeleteMixin
from .client import Client
from .worker import Worker
from .user import User
from .worker_login import WorkerLogin
from .rol import Rol
from .form import Form
from .module import Module
from .form_module import FormModule
from .permission import Permission
from .rol_form_permission import RolFormPermission
from .rol_user import RolUser

__all__ = [
    "Base",
    "LifecycleState",
    "SoftDeleteMixin",
    "Client",
    "User",
    "Worker",
    "WorkerLogin",
    "Rol",
    "Form",
    "Module",
    "FormModule",
    "Permission",
    "RolFormPermission",
    "RolUser",
]
