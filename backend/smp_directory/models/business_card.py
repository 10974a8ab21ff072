"""Business Card ORM — the directory metadata attached to a service group.

Invariants:
    - id == service_group_id (one card per service group)
    - entities ordered by position; replaced as a whole on update
    - cascade delete for entities

Design Decisions:
    - lazy="selectin" on entities: the card is always read with its entities,
      inside the session that loaded it
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smp_directory.core.business_card import SMPBusinessCard
from smp_directory.core.domain_types import ParticipantIdentifier
from smp_directory.db.base import Base


class BusinessCard(Base):
    """Business card — one per service group."""
    __tablename__ = "smp_business_cards"

    id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("smp_service_groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    participant_scheme: Mapped[str] = mapped_column(String(100), nullable=False)
    participant_value: Mapped[str] = mapped_column(String(500), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    service_group: Mapped["ServiceGroup"] = relationship(
        "ServiceGroup", back_populates="business_card",
    )
    entities: Mapped[list["BusinessCardEntity"]] = relationship(
        "BusinessCardEntity", back_populates="business_card",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="BusinessCardEntity.position",
    )

    def to_domain(self) -> SMPBusinessCard:
        return SMPBusinessCard(
            id=self.id,
            participant_identifier=ParticipantIdentifier(
                scheme=self.participant_scheme, value=self.participant_value,
            ),
            entities=tuple(e.to_domain() for e in self.entities),
        )
