"""Service Group Schemas — request/response bodies for the service group resource."""

from pydantic import BaseModel, Field

from smp_directory.core.domain_types import SMPServiceGroup
from smp_directory.schemas.business_card import IdentifierPayload


class ServiceGroupCreate(BaseModel):
    """Optional body of PUT /servicegroup/{id}."""
    extension: str | None = Field(None, max_length=10_000)


class ServiceGroupResponse(BaseModel):
    id: str
    participant_identifier: IdentifierPayload
    extension: str | None = None

    @classmethod
    def from_service_group(cls, sg: SMPServiceGroup) -> "ServiceGroupResponse":
        return cls(
            id=sg.id,
            participant_identifier=IdentifierPayload(
                scheme=sg.participant_identifier.scheme,
                value=sg.participant_identifier.value,
            ),
            extension=sg.extension,
        )
