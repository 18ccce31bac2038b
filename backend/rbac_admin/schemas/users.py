from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class UserDto(BaseModel):
    id: int | None = None
    name: str = ""
    email: str = ""
    # Write-only: always returned as None
    password: str | None = None
    worker_id: int | None = None
    created_at: datetime | None = None
    delete_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class WorkerDto(BaseModel):
    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    identity_document: str = ""
    job_title: str = ""
    email: str = ""
    phone: str | None = None
    hire_date: date | None = None

    model_config = ConfigDict(from_attributes=True)


class WorkerLoginDto(BaseModel):
    id: int | None = None
    worker_id: int = 0
    username: str = ""
    # Write-only: always returned as None
    password: str | None = None
    status: str = "active"
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
