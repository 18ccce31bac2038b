from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RolDto(BaseModel):
    id: int | None = None
    name: str = ""
    description: str | None = None
    active: bool = True
    created_at: datetime | None = None
    delete_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FormDto(BaseModel):
    id: int | None = None
    name: str = ""
    code: str = ""
    description: str | None = None
    active: bool = True
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ModuleDto(BaseModel):
    id: int | None = None
    code: str = ""
    name: str | None = None
    description: str | None = None
    active: bool = True
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PermissionDto(BaseModel):
    id: int | None = None
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FormModuleDto(BaseModel):
    id: int | None = None
    form_id: int = 0
    module_id: int = 0
    created_at: datetime | None = None
    delete_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
