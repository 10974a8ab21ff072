"""User ORM — accounts that own service groups.

Invariants:
    - login_name is unique
    - password_hash is "<salt hex>$<hash hex>" (core/passwords.py), never plaintext
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from smp_directory.core.domain_types import SMPUser
from smp_directory.db.base import Base


class User(Base):
    """User account — the principal behind HTTP Basic credentials."""
    __tablename__ = "smp_users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    login_name: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    service_groups: Mapped[list["ServiceGroup"]] = relationship(
        "ServiceGroup", back_populates="owner",
    )

    def to_domain(self) -> SMPUser:
        return SMPUser(id=str(self.id), user_name=self.login_name)
