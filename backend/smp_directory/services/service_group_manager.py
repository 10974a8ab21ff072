"""Service Group Manager — registry of service groups keyed by participant identifier.

Invariants:
    - Lookups return None for unknown identifiers (never raise)
    - A service group key is str(ParticipantIdentifier), so identifiers must be
      normalized by the identifier factory before reaching this manager
    - Deleting a service group removes its business card with it

Design Decisions:
    - ORM delete (not bulk DELETE): relationship cascade removes card and
      entities on every backend, including sqlite without FK enforcement
"""

import logging
import uuid

from sqlalchemy import func, select

from smp_directory.core.domain_types import ParticipantIdentifier, SMPServiceGroup, SMPUser
from smp_directory.core.errors import ServiceGroupExistsError
from smp_directory.infrastructure.database import DatabaseSessionManager
from smp_directory.models.service_group import ServiceGroup

logger = logging.getLogger(__name__)


class SQLServiceGroupManager:
    """Service group directory backed by smp_service_groups."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get_service_group_of_id(
        self, identifier: ParticipantIdentifier,
    ) -> SMPServiceGroup | None:
        async with self._db.session() as db:
            service_group = await db.get(ServiceGroup, str(identifier))
            return service_group.to_domain() if service_group else None

    async def create_service_group(
        self,
        identifier: ParticipantIdentifier,
        owner: SMPUser,
        extension: str | None = None,
    ) -> SMPServiceGroup:
        async with self._db.session() as db:
            if await db.get(ServiceGroup, str(identifier)) is not None:
                raise ServiceGroupExistsError(str(identifier))
            service_group = ServiceGroup(
                id=str(identifier),
                participant_scheme=identifier.scheme,
                participant_value=identifier.value,
                owner_id=uuid.UUID(owner.id),
                extension=extension,
            )
            db.add(service_group)
            await db.commit()
            logger.info(
                f"Created service group {identifier} owned by {owner.user_name}",
                extra={"service_group_id": str(identifier), "user_name": owner.user_name},
            )
            return service_group.to_domain()

    async def delete_service_group(self, identifier: ParticipantIdentifier) -> bool:
        """Delete a service group and its business card. False if unknown."""
        async with self._db.session() as db:
            service_group = await db.get(ServiceGroup, str(identifier))
            if service_group is None:
                return False
            await db.delete(service_group)
            await db.commit()
        logger.info(
            f"Deleted service group {identifier}",
            extra={"service_group_id": str(identifier)},
        )
        return True

    async def get_service_group_count(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(ServiceGroup))
            return result.scalar_one()
