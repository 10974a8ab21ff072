"""Business Card Schemas — the external (JSON) representation of a business card.

Invariants:
    - BusinessCardPayload carries its own participant identifier (scheme + value)
    - Entity order in business_entities is significant and preserved both ways
    - country_code is two upper-case letters; language codes two lower-case letters
    - At least one name per entity

Design Decisions:
    - to_entity()/from_card() live on the schema: core/ stays free of pydantic
    - Entity ids are internal and never serialized
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from smp_directory.core.business_card import (
    SMPBusinessCard, SMPBusinessCardContact, SMPBusinessCardEntity,
    SMPBusinessCardIdentifier, SMPBusinessCardName,
)


class IdentifierPayload(BaseModel):
    """Scheme + value pair (participant or additional entity identifier)."""
    scheme: str = Field(min_length=1, max_length=100)
    value: str = Field(min_length=1, max_length=500)


class NamePayload(BaseModel):
    name: str = Field(min_length=1, max_length=500)
    language: str | None = Field(None, pattern=r"^[a-z]{2}$")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ContactPayload(BaseModel):
    type: str | None = Field(None, max_length=100)
    name: str | None = Field(None, max_length=200)
    phone_number: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=200)


class BusinessEntityPayload(BaseModel):
    """One business entity — name, location, classification."""
    names: list[NamePayload] = Field(min_length=1)
    country_code: str = Field(pattern=r"^[A-Z]{2}$")
    geographical_information: str | None = Field(None, max_length=5000)
    identifiers: list[IdentifierPayload] = Field(default_factory=list)
    websites: list[str] = Field(default_factory=list)
    contacts: list[ContactPayload] = Field(default_factory=list)
    additional_information: str | None = Field(None, max_length=5000)
    registration_date: date | None = None

    def to_entity(self) -> SMPBusinessCardEntity:
        """Build the store's internal entity (fresh id)."""
        return SMPBusinessCardEntity(
            names=tuple(
                SMPBusinessCardName(name=n.name, language_code=n.language)
                for n in self.names
            ),
            country_code=self.country_code,
            geographical_information=self.geographical_information,
            identifiers=tuple(
                SMPBusinessCardIdentifier(scheme=i.scheme, value=i.value)
                for i in self.identifiers
            ),
            website_uris=tuple(self.websites),
            contacts=tuple(
                SMPBusinessCardContact(
                    type=c.type, name=c.name,
                    phone_number=c.phone_number, email=c.email,
                )
                for c in self.contacts
            ),
            additional_information=self.additional_information,
            registration_date=self.registration_date,
        )

    @classmethod
    def from_entity(cls, entity: SMPBusinessCardEntity) -> "BusinessEntityPayload":
        return cls(
            names=[
                NamePayload(name=n.name, language=n.language_code)
                for n in entity.names
            ],
            country_code=entity.country_code,
            geographical_information=entity.geographical_information,
            identifiers=[
                IdentifierPayload(scheme=i.scheme, value=i.value)
                for i in entity.identifiers
            ],
            websites=list(entity.website_uris),
            contacts=[
                ContactPayload(
                    type=c.type, name=c.name,
                    phone_number=c.phone_number, email=c.email,
                )
                for c in entity.contacts
            ],
            additional_information=entity.additional_information,
            registration_date=entity.registration_date,
        )


class BusinessCardPayload(BaseModel):
    """Business card request/response body."""
    participant_identifier: IdentifierPayload
    business_entities: list[BusinessEntityPayload] = Field(default_factory=list)

    @classmethod
    def from_card(cls, card: SMPBusinessCard) -> "BusinessCardPayload":
        return cls(
            participant_identifier=IdentifierPayload(
                scheme=card.participant_identifier.scheme,
                value=card.participant_identifier.value,
            ),
            business_entities=[
                BusinessEntityPayload.from_entity(e) for e in card.entities
            ],
        )

    def __str__(self) -> str:
        pid = self.participant_identifier
        return (
            f"BusinessCard({pid.scheme}::{pid.value}, "
            f"{len(self.business_entities)} entities)"
        )


class OperationResponse(BaseModel):
    """Body returned by mutating endpoints."""
    status: str
