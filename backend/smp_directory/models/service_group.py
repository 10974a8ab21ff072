"""Service Group ORM — registered participants and their owners.

Invariants:
    - id is the canonical "scheme::value" string of the participant identifier
    - owner_id always references an existing user
    - Deleting a service group deletes its business card (ORM cascade)

Design Decisions:
    - Scheme and value stored separately as well: rebuilds the identifier without
      re-parsing the key
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from smp_directory.core.domain_types import ParticipantIdentifier, SMPServiceGroup
from smp_directory.db.base import Base


class ServiceGroup(Base):
    """Service group — owns at most one business card."""
    __tablename__ = "smp_service_groups"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    participant_scheme: Mapped[str] = mapped_column(String(100), nullable=False)
    participant_value: Mapped[str] = mapped_column(String(500), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("smp_users.id"), nullable=False,
    )
    extension: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="service_groups")
    business_card: Mapped["BusinessCard | None"] = relationship(
        "BusinessCard", back_populates="service_group",
        cascade="all, delete-orphan", uselist=False, lazy="selectin",
    )

    def to_domain(self) -> SMPServiceGroup:
        return SMPServiceGroup(
            id=self.id,
            participant_identifier=ParticipantIdentifier(
                scheme=self.participant_scheme, value=self.participant_value,
            ),
            owner_id=str(self.owner_id),
            extension=self.extension,
        )
