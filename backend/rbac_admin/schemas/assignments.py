from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RolUserDto(BaseModel):
    id: int | None = None
    user_id: int = 0
    rol_id: int = 0
    created_at: datetime | None = None
    delete_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RolFormPermissionDto(BaseModel):
    id: int | None = None
    rol_id: int = 0
    form_id: int = 0
    permission_id: int = 0
    created_at: datetime | None = None
    delete_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
