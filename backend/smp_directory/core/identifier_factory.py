"""Identifier Factory — parses and constructs participant identifiers.

Invariants:
    - parse_participant_identifier never raises for malformed input; returns None
    - create_participant_identifier returns None for an invalid scheme/value pair
    - Both paths apply the same normalization, so parsed and constructed
      identifiers are comparable with has_same_content()

Design Decisions:
    - Two factories selected by configuration: "simple" accepts any non-empty
      scheme/value, "peppol" enforces the PEPPOL participant syntax and
      lower-cases (PEPPOL participant identifiers are case insensitive)
"""

import re

from smp_directory.core.domain_types import (
    IDENTIFIER_SEPARATOR, IdentifierType, ParticipantIdentifier,
)

PEPPOL_PARTICIPANT_SCHEME = "iso6523-actorid-upis"
PEPPOL_SCHEME_MAX_LENGTH = 25
PEPPOL_VALUE_MAX_LENGTH = 50
_PEPPOL_SCHEME_PATTERN = re.compile(r"^[a-z0-9]+-[a-z0-9]+-[a-z0-9]+$")


class SimpleIdentifierFactory:
    """Accepts any non-empty scheme and value, no normalization."""

    identifier_type = IdentifierType.SIMPLE

    def parse_participant_identifier(
        self, identifier: str | None,
    ) -> ParticipantIdentifier | None:
        if not identifier:
            return None
        scheme, sep, value = identifier.partition(IDENTIFIER_SEPARATOR)
        if not sep:
            return None
        return self.create_participant_identifier(scheme, value)

    def create_participant_identifier(
        self, scheme: str | None, value: str | None,
    ) -> ParticipantIdentifier | None:
        scheme = self._normalize_scheme(scheme)
        value = self._normalize_value(value)
        if not self.is_scheme_valid(scheme) or not self.is_value_valid(value):
            return None
        return ParticipantIdentifier(scheme=scheme, value=value)

    def _normalize_scheme(self, scheme: str | None) -> str | None:
        return scheme

    def _normalize_value(self, value: str | None) -> str | None:
        return value

    def is_scheme_valid(self, scheme: str | None) -> bool:
        return bool(scheme)

    def is_value_valid(self, value: str | None) -> bool:
        return bool(value)


class PeppolIdentifierFactory(SimpleIdentifierFactory):
    """PEPPOL participant identifier rules."""

    identifier_type = IdentifierType.PEPPOL

    def _normalize_scheme(self, scheme: str | None) -> str | None:
        return scheme.lower() if scheme else scheme

    def _normalize_value(self, value: str | None) -> str | None:
        return value.lower() if value else value

    def is_scheme_valid(self, scheme: str | None) -> bool:
        if not scheme or len(scheme) > PEPPOL_SCHEME_MAX_LENGTH:
            return False
        return _PEPPOL_SCHEME_PATTERN.match(scheme) is not None

    def is_value_valid(self, value: str | None) -> bool:
        if not value or len(value) > PEPPOL_VALUE_MAX_LENGTH:
            return False
        if value.strip() != value:
            return False
        try:
            value.encode("iso-8859-1")
        except UnicodeEncodeError:
            return False
        return True


def create_identifier_factory(
    identifier_type: IdentifierType | str,
) -> SimpleIdentifierFactory:
    """Factory for the configured identifier syntax. Raises ValueError if unknown."""
    kind = IdentifierType(identifier_type)
    if kind == IdentifierType.PEPPOL:
        return PeppolIdentifierFactory()
    return SimpleIdentifierFactory()
