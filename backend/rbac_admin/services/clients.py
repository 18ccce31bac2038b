"""Client mapper and service factory."""
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.clients import ClientStore
from ..domain.invariants import require_positive_number, require_present, require_text
from ..models.client import Client
from ..schemas.clients import ClientDto
from .base import EntityService, UniqueRule


class ClientMapper:
    entity_name = "Client"

    def validate(self, dto: ClientDto) -> None:
        require_present(dto, self.entity_name)
        require_text(dto.first_name, "first_name", "Client first name")
        require_text(dto.last_name, "last_name", "Client last name")
        require_text(dto.email, "email", "Client email")
        require_text(dto.identity_document, "identity_document", "Client identity document")
        require_positive_number(dto.phone, "phone", "Client phone")

    def to_entity(self, dto: ClientDto) -> Client:
        client = Client(
            id=dto.id,
            first_name=dto.first_name,
            last_name=dto.last_name,
            identity_document=dto.identity_document,
            client_type=dto.client_type,
            phone=dto.phone,
            email=dto.email,
            address=dto.address,
            socioeconomic_stratification=dto.socioeconomic_stratification,
        )
        # registration date defaults to the insert time
        if dto.registration_date is not None:
            client.registration_date = dto.registration_date
        return client

    def to_dto(self, entity: Client) -> ClientDto:
        return ClientDto.model_validate(entity)


def build_client_service(session: AsyncSession) -> EntityService[ClientDto, Client]:
    return EntityService(
        ClientStore(session),
        ClientMapper(),
        unique_rules=[UniqueRule(("identity_document",))],
        preserved_fields=["registration_date"],
    )
