"""Domain Types — value objects shared by the directory API and its collaborators.

Invariants:
    - ParticipantIdentifier is immutable; content equality is exact scheme+value match
    - str(ParticipantIdentifier) is "scheme::value" and is the storage key of a
      service group and of its business card
    - BasicAuthCredentials never renders the password

Design Decisions:
    - Frozen dataclasses over NamedTuple: keyword construction, hashable, typed
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum


IDENTIFIER_SEPARATOR = "::"


# ─── Identity Types ──────────────────────────────────────────────

@dataclass(frozen=True)
class ParticipantIdentifier:
    """Structured participant key: scheme + value."""
    scheme: str
    value: str

    def has_same_content(self, other: "ParticipantIdentifier | None") -> bool:
        return (
            other is not None
            and self.scheme == other.scheme
            and self.value == other.value
        )

    def __str__(self) -> str:
        return f"{self.scheme}{IDENTIFIER_SEPARATOR}{self.value}"


@dataclass(frozen=True)
class SMPUser:
    """Authenticated principal. Opaque to the directory API."""
    id: str
    user_name: str


@dataclass(frozen=True)
class BasicAuthCredentials:
    """HTTP Basic credentials as presented by the caller."""
    user_name: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SMPServiceGroup:
    """Registered service group — read-only for the business card API."""
    id: str
    participant_identifier: ParticipantIdentifier
    owner_id: str
    extension: str | None = None


# ─── Enums ───────────────────────────────────────────────────────

class OperationResult(str, Enum):
    """Logical outcome of a mutating operation."""
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_success(self) -> bool:
        return self is OperationResult.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self is OperationResult.FAILURE


class IdentifierType(str, Enum):
    """Identifier syntax accepted by this deployment."""
    SIMPLE = "simple"
    PEPPOL = "peppol"


class BusinessCardOperation(str, Enum):
    """Operation names used as counter keys and log context."""
    GET = "getBusinessCard"
    CREATE = "createBusinessCard"
    DELETE = "deleteBusinessCard"
