"""Business Card Entity ORM — one business entity of a card.

Invariants:
    - Always belongs to a BusinessCard (business_card_id FK)
    - position is the 0-based index in the submitted entity list
    - country_code is a 2-letter code

Design Decisions:
    - JSON columns for names, identifiers, websites and contacts: they are only
      ever read and written together with the entity
"""

from datetime import date

from sqlalchemy import String, Text, Integer, Date, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smp_directory.core.business_card import (
    SMPBusinessCardContact, SMPBusinessCardEntity,
    SMPBusinessCardIdentifier, SMPBusinessCardName,
)
from smp_directory.db.base import Base


class BusinessCardEntity(Base):
    """Business entity row — ordered within its card."""
    __tablename__ = "smp_business_card_entities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    business_card_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("smp_business_cards.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    names: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    geographical_information: Mapped[str | None] = mapped_column(Text, nullable=True)
    identifiers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    website_uris: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    contacts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    additional_information: Mapped[str | None] = mapped_column(Text, nullable=True)
    registration_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    business_card: Mapped["BusinessCard"] = relationship(
        "BusinessCard", back_populates="entities",
    )

    @classmethod
    def from_domain(
        cls, entity: SMPBusinessCardEntity, position: int,
    ) -> "BusinessCardEntity":
        return cls(
            id=entity.id,
            position=position,
            names=[
                {"name": n.name, "language_code": n.language_code}
                for n in entity.names
            ],
            country_code=entity.country_code,
            geographical_information=entity.geographical_information,
            identifiers=[
                {"scheme": i.scheme, "value": i.value} for i in entity.identifiers
            ],
            website_uris=list(entity.website_uris),
            contacts=[
                {
                    "type": c.type, "name": c.name,
                    "phone_number": c.phone_number, "email": c.email,
                }
                for c in entity.contacts
            ],
            additional_information=entity.additional_information,
            registration_date=entity.registration_date,
        )

    def to_domain(self) -> SMPBusinessCardEntity:
        return SMPBusinessCardEntity(
            id=self.id,
            names=tuple(SMPBusinessCardName(**n) for n in self.names),
            country_code=self.country_code,
            geographical_information=self.geographical_information,
            identifiers=tuple(SMPBusinessCardIdentifier(**i) for i in self.identifiers),
            website_uris=tuple(self.website_uris),
            contacts=tuple(SMPBusinessCardContact(**c) for c in self.contacts),
            additional_information=self.additional_information,
            registration_date=self.registration_date,
        )
