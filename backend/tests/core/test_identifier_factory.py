"""Identifier Factory — parsing and construction of participant identifiers.

Tests:
    - Malformed strings parse to None (never raise)
    - PEPPOL factory lower-cases and validates scheme/value syntax
    - Parsed and constructed identifiers compare equal after normalization
"""

import pytest

from smp_directory.core.domain_types import IdentifierType, ParticipantIdentifier
from smp_directory.core.identifier_factory import (
    PEPPOL_PARTICIPANT_SCHEME, PeppolIdentifierFactory, SimpleIdentifierFactory,
    create_identifier_factory,
)


# ─── Simple ──────────────────────────────────────────────────────

def test_simple_parses_scheme_and_value():
    pid = SimpleIdentifierFactory().parse_participant_identifier("abc::Def:1")
    assert pid == ParticipantIdentifier("abc", "Def:1")


def test_simple_splits_on_first_separator():
    pid = SimpleIdentifierFactory().parse_participant_identifier("a::b::c")
    assert pid == ParticipantIdentifier("a", "b::c")


@pytest.mark.parametrize("raw", [None, "", "no-separator", "::value", "scheme::"])
def test_simple_rejects_malformed(raw):
    assert SimpleIdentifierFactory().parse_participant_identifier(raw) is None


def test_simple_create_keeps_case():
    pid = SimpleIdentifierFactory().create_participant_identifier("Abc", "XyZ")
    assert pid == ParticipantIdentifier("Abc", "XyZ")


# ─── PEPPOL ──────────────────────────────────────────────────────

def test_peppol_lowercases_on_parse():
    pid = PeppolIdentifierFactory().parse_participant_identifier(
        "ISO6523-ACTORID-UPIS::0088:ABC",
    )
    assert pid == ParticipantIdentifier(PEPPOL_PARTICIPANT_SCHEME, "0088:abc")


def test_peppol_parse_and_create_agree():
    factory = PeppolIdentifierFactory()
    parsed = factory.parse_participant_identifier("iso6523-actorid-upis::0088:ABC")
    created = factory.create_participant_identifier("ISO6523-actorid-upis", "0088:abc")
    assert parsed.has_same_content(created)


@pytest.mark.parametrize("scheme", [
    "not a scheme",
    "onlyone-dash",
    "a" * 26,
    "iso6523-actorid-upis-extra",
])
def test_peppol_rejects_bad_scheme(scheme):
    factory = PeppolIdentifierFactory()
    assert factory.create_participant_identifier(scheme, "0088:1") is None


def test_peppol_rejects_too_long_value():
    factory = PeppolIdentifierFactory()
    assert factory.create_participant_identifier(
        PEPPOL_PARTICIPANT_SCHEME, "1" * 51,
    ) is None


def test_peppol_rejects_surrounding_whitespace():
    factory = PeppolIdentifierFactory()
    assert factory.create_participant_identifier(
        PEPPOL_PARTICIPANT_SCHEME, " 0088:1",
    ) is None


def test_peppol_rejects_non_latin1_value():
    factory = PeppolIdentifierFactory()
    assert factory.create_participant_identifier(
        PEPPOL_PARTICIPANT_SCHEME, "0088:中",
    ) is None


# ─── Factory selection ──────────────────────────────────────────

def test_create_factory_by_type():
    assert isinstance(create_identifier_factory("peppol"), PeppolIdentifierFactory)
    simple = create_identifier_factory(IdentifierType.SIMPLE)
    assert type(simple) is SimpleIdentifierFactory


def test_create_factory_unknown_type_raises():
    with pytest.raises(ValueError):
        create_identifier_factory("bogus")
