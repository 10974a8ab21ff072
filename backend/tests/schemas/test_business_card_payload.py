"""Business Card Payload — validation and conversion to/from the stored card.

Tests:
    - Entity order and all fields survive payload → entity → card → payload
    - Country and language codes are validated
    - Entities need at least one non-blank name
"""

from datetime import date

import pytest
from pydantic import ValidationError

from smp_directory.core.business_card import SMPBusinessCard
from smp_directory.core.domain_types import ParticipantIdentifier
from smp_directory.schemas.business_card import BusinessCardPayload, BusinessEntityPayload


def _payload():
    return BusinessCardPayload.model_validate({
        "participant_identifier": {"scheme": "iso6523-actorid-upis", "value": "0088:1"},
        "business_entities": [
            {
                "names": [{"name": " ACME GmbH ", "language": "de"}],
                "country_code": "AT",
                "geographical_information": "Vienna",
                "identifiers": [{"scheme": "VAT", "value": "ATU123"}],
                "websites": ["https://acme.example"],
                "contacts": [{"type": "sales", "email": "sales@acme.example"}],
                "registration_date": "2020-01-31",
            },
            {"names": [{"name": "ACME Ltd"}], "country_code": "GB"},
        ],
    })


def test_entity_conversion_keeps_fields():
    entity = _payload().business_entities[0].to_entity()
    assert entity.names[0].name == "ACME GmbH"
    assert entity.names[0].language_code == "de"
    assert entity.country_code == "AT"
    assert entity.identifiers[0].value == "ATU123"
    assert entity.website_uris == ("https://acme.example",)
    assert entity.contacts[0].email == "sales@acme.example"
    assert entity.registration_date == date(2020, 1, 31)


def test_card_to_payload_preserves_entity_order():
    payload = _payload()
    card = SMPBusinessCard(
        id="iso6523-actorid-upis::0088:1",
        participant_identifier=ParticipantIdentifier("iso6523-actorid-upis", "0088:1"),
        entities=tuple(e.to_entity() for e in payload.business_entities),
    )
    back = BusinessCardPayload.from_card(card)
    assert [e.country_code for e in back.business_entities] == ["AT", "GB"]
    assert back.business_entities[0] == payload.business_entities[0]


def test_entity_ids_are_fresh_and_not_serialized():
    entity_payload = _payload().business_entities[0]
    assert entity_payload.to_entity().id != entity_payload.to_entity().id
    assert "id" not in entity_payload.model_dump()


@pytest.mark.parametrize("country", ["at", "AUT", "A1", ""])
def test_bad_country_code_rejected(country):
    with pytest.raises(ValidationError):
        BusinessEntityPayload(names=[{"name": "x"}], country_code=country)


def test_bad_language_code_rejected():
    with pytest.raises(ValidationError):
        BusinessEntityPayload(names=[{"name": "x", "language": "DE"}], country_code="AT")


def test_entity_requires_a_name():
    with pytest.raises(ValidationError):
        BusinessEntityPayload(names=[], country_code="AT")


def test_blank_name_rejected():
    with pytest.raises(ValidationError):
        BusinessEntityPayload(names=[{"name": "   "}], country_code="AT")


def test_str_summarizes_card():
    assert str(_payload()) == "BusinessCard(iso6523-actorid-upis::0088:1, 2 entities)"
