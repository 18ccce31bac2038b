from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ClientDto(BaseModel):
    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    identity_document: str = ""
    client_type: str = ""
    phone: int = 0
    email: str = ""
    address: str = ""
    socioeconomic_stratification: int = 0
    registration_date: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
