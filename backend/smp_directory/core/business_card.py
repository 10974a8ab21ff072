"""Business Card Domain — internal representation of directory metadata.

Invariants:
    - A business card belongs to exactly one service group; card id == service group id
    - Entities are an ordered tuple, replaced wholesale on every upsert
    - Entity values are immutable; each entity carries its own generated id

Design Decisions:
    - Separate from schemas/business_card.py: the payload is the API contract,
      these dataclasses are what the store keeps
"""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from smp_directory.core.domain_types import ParticipantIdentifier


@dataclass(frozen=True)
class SMPBusinessCardName:
    name: str
    language_code: str | None = None


@dataclass(frozen=True)
class SMPBusinessCardIdentifier:
    scheme: str
    value: str


@dataclass(frozen=True)
class SMPBusinessCardContact:
    type: str | None = None
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class SMPBusinessCardEntity:
    """One business entity of a card (name, location, classification)."""
    names: tuple[SMPBusinessCardName, ...]
    country_code: str
    geographical_information: str | None = None
    identifiers: tuple[SMPBusinessCardIdentifier, ...] = ()
    website_uris: tuple[str, ...] = ()
    contacts: tuple[SMPBusinessCardContact, ...] = ()
    additional_information: str | None = None
    registration_date: date | None = None
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(frozen=True)
class SMPBusinessCard:
    """At most one per service group."""
    id: str
    participant_identifier: ParticipantIdentifier
    entities: tuple[SMPBusinessCardEntity, ...] = ()

    @property
    def entity_count(self) -> int:
        return len(self.entities)
