"""Business Card Server API — read, upsert and delete business cards of service groups.

Invariants:
    - Identifier parsing is always the first check; a parse failure is raised
      before any other collaborator is called
    - Mutations authenticate and verify ownership before touching the store
    - "Business card support disabled" is checked after identifier/ownership
      checks, never before parsing
    - createBusinessCard replaces the whole entity list (upsert)
    - Invocation counter incremented at entry, success counter only on success,
      error counter only on a logical store failure
    - Every raised SMPServerError is logged with operation and service group id

Design Decisions:
    - All five collaborators injected; one instance per request so the request
      URI can be attached to raised errors
    - Store failure is returned as OperationResult.FAILURE; the route decides
      the HTTP status
"""

import logging

from smp_directory.core.domain_types import (
    BasicAuthCredentials, BusinessCardOperation, OperationResult, ParticipantIdentifier,
)
from smp_directory.core.errors import (
    BusinessCardNotFoundError, FeatureNotSupportedError,
    InvalidIdentifierError, ParticipantMismatchError, ServiceGroupNotFoundError,
)
from smp_directory.core.repository_protocols import (
    BusinessCardStore, CredentialValidator, IdentifierFactory,
    OwnershipGuard, ServiceGroupDirectory,
)
from smp_directory.core.statistics import get_keyed_counter
from smp_directory.schemas.business_card import BusinessCardPayload
from smp_directory.services.request_logging import logged_failures

logger = logging.getLogger(__name__)

LOG_PREFIX = "[BusinessCard REST API] "

_COUNTER_PREFIX = "BusinessCardServerAPI"
invocation_counter = get_keyed_counter(f"{_COUNTER_PREFIX}$call")
success_counter = get_keyed_counter(f"{_COUNTER_PREFIX}$success")
error_counter = get_keyed_counter(f"{_COUNTER_PREFIX}$error")


class BusinessCardServerAPI:
    """Business card REST operations over injected collaborators."""

    def __init__(
        self,
        identifier_factory: IdentifierFactory,
        service_group_mgr: ServiceGroupDirectory,
        credential_validator: CredentialValidator,
        ownership_guard: OwnershipGuard,
        business_card_mgr: BusinessCardStore | None = None,
        current_uri: str | None = None,
    ):
        self._identifier_factory = identifier_factory
        self._service_group_mgr = service_group_mgr
        self._credential_validator = credential_validator
        self._ownership_guard = ownership_guard
        self._business_card_mgr = business_card_mgr
        self._current_uri = current_uri

    async def get_business_card(self, service_group_id: str) -> BusinessCardPayload:
        operation = BusinessCardOperation.GET
        self._log_info(operation, f"GET /businesscard/{service_group_id}", service_group_id)
        invocation_counter.increment(operation.value)

        with logged_failures(LOG_PREFIX, operation.value, service_group_id, self._current_uri):
            identifier = self._parse_service_group_id(service_group_id)
            service_group = await self._service_group_mgr.get_service_group_of_id(identifier)
            if service_group is None:
                raise ServiceGroupNotFoundError(service_group_id)

            business_card_mgr = self._require_business_card_mgr()
            business_card = await business_card_mgr.get_business_card_of_service_group(
                service_group,
            )
            if business_card is None:
                raise BusinessCardNotFoundError(service_group_id)

        self._log_info(operation, f"Finished getBusinessCard({service_group_id})", service_group_id)
        success_counter.increment(operation.value)
        return BusinessCardPayload.from_card(business_card)

    async def create_business_card(
        self,
        service_group_id: str,
        business_card: BusinessCardPayload,
        credentials: BasicAuthCredentials | None,
    ) -> OperationResult:
        operation = BusinessCardOperation.CREATE
        self._log_info(
            operation, f"PUT /businesscard/{service_group_id} ==> {business_card}",
            service_group_id,
        )
        invocation_counter.increment(operation.value)

        with logged_failures(LOG_PREFIX, operation.value, service_group_id, self._current_uri):
            identifier = self._parse_service_group_id(service_group_id)

            payload_pid = business_card.participant_identifier
            payload_identifier = self._identifier_factory.create_participant_identifier(
                payload_pid.scheme, payload_pid.value,
            )
            if not identifier.has_same_content(payload_identifier):
                # Business identifiers must be equal
                raise ParticipantMismatchError(
                    str(identifier),
                    str(payload_identifier) if payload_identifier
                    else str(ParticipantIdentifier(payload_pid.scheme, payload_pid.value)),
                )

            service_group = await self._service_group_mgr.get_service_group_of_id(identifier)
            if service_group is None:
                raise ServiceGroupNotFoundError(service_group_id)

            user = await self._credential_validator.validate_user_credentials(credentials)
            await self._ownership_guard.verify_ownership(identifier, user)

            business_card_mgr = self._require_business_card_mgr()

        entities = [entity.to_entity() for entity in business_card.business_entities]
        stored = await business_card_mgr.create_or_update_business_card(
            service_group, entities,
        )
        if stored is None:
            logger.error(
                f"{LOG_PREFIX}Finished createBusinessCard({service_group_id},"
                f"{business_card}) - failure",
                extra={"operation": operation.value, "service_group_id": service_group_id},
            )
            error_counter.increment(operation.value)
            return OperationResult.FAILURE

        self._log_info(
            operation,
            f"Finished createBusinessCard({service_group_id},{business_card}) - success",
            service_group_id,
        )
        success_counter.increment(operation.value)
        return OperationResult.SUCCESS

    async def delete_business_card(
        self,
        service_group_id: str,
        credentials: BasicAuthCredentials | None,
    ) -> OperationResult:
        operation = BusinessCardOperation.DELETE
        self._log_info(operation, f"DELETE /businesscard/{service_group_id}", service_group_id)
        invocation_counter.increment(operation.value)

        with logged_failures(LOG_PREFIX, operation.value, service_group_id, self._current_uri):
            identifier = self._parse_service_group_id(service_group_id)

            user = await self._credential_validator.validate_user_credentials(credentials)
            await self._ownership_guard.verify_ownership(identifier, user)

            business_card_mgr = self._require_business_card_mgr()
            # Canonical key of the parsed identifier, so normalized spellings match
            business_card = await business_card_mgr.get_business_card_of_id(str(identifier))
            if business_card is None:
                raise BusinessCardNotFoundError(service_group_id)

            await business_card_mgr.delete_business_card(business_card)

        self._log_info(operation, f"Finished deleteBusinessCard({service_group_id})", service_group_id)
        success_counter.increment(operation.value)
        return OperationResult.SUCCESS

    # ─── helpers ────────────────────────────────────────────────

    def _parse_service_group_id(self, service_group_id: str) -> ParticipantIdentifier:
        identifier = self._identifier_factory.parse_participant_identifier(service_group_id)
        if identifier is None:
            raise InvalidIdentifierError(service_group_id)
        return identifier

    def _require_business_card_mgr(self) -> BusinessCardStore:
        if self._business_card_mgr is None:
            raise FeatureNotSupportedError()
        return self._business_card_mgr

    @staticmethod
    def _log_info(
        operation: BusinessCardOperation, message: str, service_group_id: str,
    ) -> None:
        logger.info(
            f"{LOG_PREFIX}{message}",
            extra={"operation": operation.value, "service_group_id": service_group_id},
        )
