"""Business Card Manager — persistence of business cards and their entities.

Invariants:
    - At most one card per service group (card id == service group id)
    - create_or_update replaces the full entity list in one transaction;
      readers see the old list or the new one, never a mix
    - create_or_update returns None on a database failure instead of raising
    - Returned cards are detached domain values (no lazy loading after return)

Design Decisions:
    - Reassigning BusinessCard.entities with delete-orphan cascade: the ORM
      deletes the previous entities and inserts the new ones in the same flush
"""

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import func, select

from smp_directory.core.business_card import SMPBusinessCard, SMPBusinessCardEntity
from smp_directory.core.domain_types import SMPServiceGroup
from smp_directory.core.errors import DatabaseError
from smp_directory.infrastructure.database import DatabaseSessionManager
from smp_directory.models.business_card import BusinessCard
from smp_directory.models.business_card_entity import BusinessCardEntity

logger = logging.getLogger(__name__)


class SQLBusinessCardManager:
    """Business card store backed by smp_business_cards."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get_business_card_of_service_group(
        self, service_group: SMPServiceGroup,
    ) -> SMPBusinessCard | None:
        return await self.get_business_card_of_id(service_group.id)

    async def get_business_card_of_id(self, card_id: str) -> SMPBusinessCard | None:
        async with self._db.session() as db:
            card = await db.get(BusinessCard, card_id)
            return card.to_domain() if card else None

    async def create_or_update_business_card(
        self,
        service_group: SMPServiceGroup,
        entities: Sequence[SMPBusinessCardEntity],
    ) -> SMPBusinessCard | None:
        try:
            async with self._db.session() as db:
                card = await db.get(BusinessCard, service_group.id)
                created = card is None
                if created:
                    card = BusinessCard(
                        id=service_group.id,
                        participant_scheme=service_group.participant_identifier.scheme,
                        participant_value=service_group.participant_identifier.value,
                    )
                    db.add(card)
                card.entities = [
                    BusinessCardEntity.from_domain(entity, position)
                    for position, entity in enumerate(entities)
                ]
                card.updated_at = datetime.now(timezone.utc)
                await db.commit()
                result = card.to_domain()
        except DatabaseError as e:
            logger.error(
                f"Failed to store business card of {service_group.id}: {e.message}",
                extra={"service_group_id": service_group.id, "error_code": e.code},
            )
            return None

        logger.info(
            f"{'Created' if created else 'Updated'} business card {result.id}"
            f" with {result.entity_count} entities",
            extra={"service_group_id": result.id},
        )
        return result

    async def delete_business_card(self, card: SMPBusinessCard) -> bool:
        """Delete a card and its entities. False if it no longer exists."""
        async with self._db.session() as db:
            existing = await db.get(BusinessCard, card.id)
            if existing is None:
                return False
            await db.delete(existing)
            await db.commit()
        logger.info(
            f"Deleted business card {card.id}", extra={"service_group_id": card.id},
        )
        return True

    async def get_business_card_count(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(BusinessCard))
            return result.scalar_one()
