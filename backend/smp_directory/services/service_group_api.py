"""Service Group Server API — register, read and remove service groups.

Invariants:
    - Identifier parsing first, as in the business card API
    - A new service group is owned by the user whose credentials created it
    - Only the owner may delete a service group; its business card goes with it
    - Every raised SMPServerError carries and logs the operation name
"""

import logging

from smp_directory.core.domain_types import (
    BasicAuthCredentials, OperationResult, ParticipantIdentifier, SMPServiceGroup,
)
from smp_directory.core.errors import InvalidIdentifierError, ServiceGroupNotFoundError
from smp_directory.core.statistics import get_keyed_counter
from smp_directory.services.request_logging import logged_failures
from smp_directory.services.smp_managers import SMPManagers

logger = logging.getLogger(__name__)

LOG_PREFIX = "[ServiceGroup REST API] "

GET_SERVICE_GROUP = "getServiceGroup"
CREATE_SERVICE_GROUP = "createServiceGroup"
DELETE_SERVICE_GROUP = "deleteServiceGroup"

invocation_counter = get_keyed_counter("ServiceGroupServerAPI$call")
success_counter = get_keyed_counter("ServiceGroupServerAPI$success")


class ServiceGroupServerAPI:
    """Service group operations; thin layer over SMPManagers."""

    def __init__(self, managers: SMPManagers, current_uri: str | None = None):
        self._managers = managers
        self._current_uri = current_uri

    async def get_service_group(self, service_group_id: str) -> SMPServiceGroup:
        logger.info(f"{LOG_PREFIX}GET /servicegroup/{service_group_id}")
        invocation_counter.increment(GET_SERVICE_GROUP)
        with self._logged_failures(GET_SERVICE_GROUP, service_group_id):
            identifier = self._parse(service_group_id)
            service_group = await self._managers.service_group_mgr.get_service_group_of_id(
                identifier,
            )
            if service_group is None:
                raise ServiceGroupNotFoundError(service_group_id)
        success_counter.increment(GET_SERVICE_GROUP)
        return service_group

    async def create_service_group(
        self,
        service_group_id: str,
        credentials: BasicAuthCredentials | None,
        extension: str | None = None,
    ) -> SMPServiceGroup:
        logger.info(f"{LOG_PREFIX}PUT /servicegroup/{service_group_id}")
        invocation_counter.increment(CREATE_SERVICE_GROUP)
        with self._logged_failures(CREATE_SERVICE_GROUP, service_group_id):
            identifier = self._parse(service_group_id)
            user = await self._managers.user_mgr.validate_user_credentials(credentials)
            service_group = await self._managers.service_group_mgr.create_service_group(
                identifier, user, extension,
            )
        success_counter.increment(CREATE_SERVICE_GROUP)
        return service_group

    async def delete_service_group(
        self, service_group_id: str, credentials: BasicAuthCredentials | None,
    ) -> OperationResult:
        logger.info(f"{LOG_PREFIX}DELETE /servicegroup/{service_group_id}")
        invocation_counter.increment(DELETE_SERVICE_GROUP)
        with self._logged_failures(DELETE_SERVICE_GROUP, service_group_id):
            identifier = self._parse(service_group_id)
            user = await self._managers.user_mgr.validate_user_credentials(credentials)
            await self._managers.user_mgr.verify_ownership(identifier, user)
            if not await self._managers.service_group_mgr.delete_service_group(identifier):
                # removed concurrently between ownership check and delete
                raise ServiceGroupNotFoundError(service_group_id)
        success_counter.increment(DELETE_SERVICE_GROUP)
        return OperationResult.SUCCESS

    def _parse(self, service_group_id: str) -> ParticipantIdentifier:
        identifier = self._managers.identifier_factory.parse_participant_identifier(
            service_group_id,
        )
        if identifier is None:
            raise InvalidIdentifierError(service_group_id)
        return identifier

    def _logged_failures(self, operation: str, service_group_id: str):
        return logged_failures(LOG_PREFIX, operation, service_group_id, self._current_uri)
