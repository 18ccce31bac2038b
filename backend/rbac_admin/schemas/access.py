from datetime import datetime

from pydantic import BaseModel, Field


class Capabilities(BaseModel):
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    def merge(self, other: "Capabilities") -> "Capabilities":
        return Capabilities(
            can_read=self.can_read or other.can_read,
            can_create=self.can_create or other.can_create,
            can_update=self.can_update or other.can_update,
            can_delete=self.can_delete or other.can_delete,
        )


class RolFormPermissionDetail(Capabilities):
    """An active RolFormPermission row joined with its form and permission."""

    id: int
    rol_id: int
    form_id: int
    form_name: str
    form_code: str
    form_active: bool
    permission_id: int
    created_at: datetime | None = None


class FormAccess(Capabilities):
    form_id: int
    name: str
    code: str


class ModuleAccess(BaseModel):
    module_id: int
    code: str
    name: str | None = None
    forms: list[FormAccess] = Field(default_factory=list)


class RolAccess(BaseModel):
    rol_id: int
    modules: list[ModuleAccess] = Field(default_factory=list)
    ungrouped_forms: list[FormAccess] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.modules and not self.ungrouped_forms


class UserAccess(BaseModel):
    user_id: int
    rol_ids: list[int] = Field(default_factory=list)
    modules: list[ModuleAccess] = Field(default_factory=list)
    ungrouped_forms: list[FormAccess] = Field(default_factory=list)
