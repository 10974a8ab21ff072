"""Boundary Protocols — contracts between the business card API and its collaborators.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - Lookups return None for absence; they do not raise
    - create_or_update_business_card returns None on a store-level failure
      (a result, not an exception)
    - Credential and ownership failures are raised as AuthorizationError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - IdentifierFactory is sync (pure); all storage-facing contracts are async
"""

from typing import Protocol, Sequence

from smp_directory.core.business_card import SMPBusinessCard, SMPBusinessCardEntity
from smp_directory.core.domain_types import (
    BasicAuthCredentials, ParticipantIdentifier, SMPServiceGroup, SMPUser,
)


class IdentifierFactory(Protocol):
    """Parses raw strings and constructs identifiers with one normalization."""
    def parse_participant_identifier(
        self, identifier: str | None,
    ) -> ParticipantIdentifier | None: ...
    def create_participant_identifier(
        self, scheme: str | None, value: str | None,
    ) -> ParticipantIdentifier | None: ...


class ServiceGroupDirectory(Protocol):
    """Maps a participant identifier to its registered service group."""
    async def get_service_group_of_id(
        self, identifier: ParticipantIdentifier,
    ) -> SMPServiceGroup | None: ...


class CredentialValidator(Protocol):
    """Turns presented credentials into an authenticated principal."""
    async def validate_user_credentials(
        self, credentials: BasicAuthCredentials | None,
    ) -> SMPUser: ...


class OwnershipGuard(Protocol):
    """Confirms a principal owns the service group of an identifier."""
    async def verify_ownership(
        self, identifier: ParticipantIdentifier, user: SMPUser,
    ) -> None: ...


class BusinessCardStore(Protocol):
    """Holds at most one business card per service group."""
    async def get_business_card_of_service_group(
        self, service_group: SMPServiceGroup,
    ) -> SMPBusinessCard | None: ...
    async def get_business_card_of_id(self, card_id: str) -> SMPBusinessCard | None: ...
    async def create_or_update_business_card(
        self,
        service_group: SMPServiceGroup,
        entities: Sequence[SMPBusinessCardEntity],
    ) -> SMPBusinessCard | None: ...
    async def delete_business_card(self, card: SMPBusinessCard) -> bool: ...
    async def get_business_card_count(self) -> int: ...
