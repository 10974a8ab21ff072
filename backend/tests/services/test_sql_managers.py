"""SQL Managers — users, service groups and business cards on a real (SQLite) DB.

Invariants:
    - Upsert replaces the whole entity list; order is preserved
    - Deleting a service group deletes its business card
    - Credential and ownership failures raise the matching errors
"""

import threading
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from smp_directory.core.business_card import SMPBusinessCardEntity, SMPBusinessCardName
from smp_directory.core.domain_types import BasicAuthCredentials, ParticipantIdentifier
from smp_directory.core.errors import (
    DatabaseError, OwnershipError, ServiceGroupExistsError,
    ServiceGroupNotFoundError, UnauthorizedError, UnknownUserError,
)
from smp_directory.models.business_card_entity import BusinessCardEntity

OWNER_NAME = "owner"
OWNER_PASSWORD = "owner-secret"
SERVICE_GROUP_ID = "iso6523-actorid-upis::0088:5798000000001"


def _entity(name, country="AT"):
    return SMPBusinessCardEntity(names=(SMPBusinessCardName(name),), country_code=country)


# ─── Users ───────────────────────────────────────────────────────

async def test_valid_credentials_return_user(managers, owner):
    user = await managers.user_mgr.validate_user_credentials(
        BasicAuthCredentials(OWNER_NAME, OWNER_PASSWORD),
    )
    assert user == owner


async def test_missing_credentials_rejected(managers):
    with pytest.raises(UnauthorizedError):
        await managers.user_mgr.validate_user_credentials(None)


async def test_unknown_user_rejected(managers):
    with pytest.raises(UnknownUserError):
        await managers.user_mgr.validate_user_credentials(
            BasicAuthCredentials("nobody", "pw"),
        )


async def test_wrong_password_rejected(managers, owner):
    with pytest.raises(UnauthorizedError) as exc_info:
        await managers.user_mgr.validate_user_credentials(
            BasicAuthCredentials(OWNER_NAME, "wrong"),
        )
    assert exc_info.value.code == "UNAUTHORIZED"


async def test_password_check_runs_off_the_event_loop_thread(managers, owner):
    from smp_directory.core.passwords import verify_password

    threads = []

    def recording_verify(plain, hashed):
        threads.append(threading.get_ident())
        return verify_password(plain, hashed)

    with patch(
        "smp_directory.services.user_manager.verify_password", recording_verify,
    ):
        await managers.user_mgr.validate_user_credentials(
            BasicAuthCredentials(OWNER_NAME, OWNER_PASSWORD),
        )
    assert threads and threads[0] != threading.get_ident()


async def test_password_hashing_runs_off_the_event_loop_thread(managers):
    from smp_directory.core.passwords import hash_password

    threads = []

    def recording_hash(password):
        threads.append(threading.get_ident())
        return hash_password(password)

    with patch("smp_directory.services.user_manager.hash_password", recording_hash):
        await managers.user_mgr.create_user("threaded", "pw")
    assert threads and threads[0] != threading.get_ident()


async def test_duplicate_user_name_is_database_error(managers, owner):
    with pytest.raises(DatabaseError):
        await managers.user_mgr.create_user(OWNER_NAME, "again")


async def test_ownership(managers, service_group, owner, other_user):
    pid = service_group.participant_identifier
    await managers.user_mgr.verify_ownership(pid, owner)
    with pytest.raises(OwnershipError):
        await managers.user_mgr.verify_ownership(pid, other_user)


async def test_ownership_of_unknown_service_group(managers, owner):
    with pytest.raises(ServiceGroupNotFoundError):
        await managers.user_mgr.verify_ownership(
            ParticipantIdentifier("iso6523-actorid-upis", "0088:none"), owner,
        )


# ─── Service groups ──────────────────────────────────────────────

async def test_service_group_round_trip(managers, service_group, owner):
    found = await managers.service_group_mgr.get_service_group_of_id(
        service_group.participant_identifier,
    )
    assert found == service_group
    assert found.id == SERVICE_GROUP_ID
    assert found.owner_id == owner.id


async def test_duplicate_service_group_rejected(managers, service_group, owner):
    with pytest.raises(ServiceGroupExistsError):
        await managers.service_group_mgr.create_service_group(
            service_group.participant_identifier, owner,
        )


async def test_unknown_service_group_is_none(managers):
    assert await managers.service_group_mgr.get_service_group_of_id(
        ParticipantIdentifier("iso6523-actorid-upis", "0088:none"),
    ) is None


# ─── Business cards ──────────────────────────────────────────────

async def test_create_and_read_card(managers, service_group):
    cards = managers.business_card_mgr
    stored = await cards.create_or_update_business_card(
        service_group, [_entity("First"), _entity("Second", "DE")],
    )
    assert stored.id == service_group.id
    assert stored.participant_identifier == service_group.participant_identifier

    read = await cards.get_business_card_of_service_group(service_group)
    assert [e.names[0].name for e in read.entities] == ["First", "Second"]
    assert [e.country_code for e in read.entities] == ["AT", "DE"]


async def test_update_replaces_all_entities(managers, service_group, test_session_factory):
    cards = managers.business_card_mgr
    await cards.create_or_update_business_card(
        service_group, [_entity("A"), _entity("B"), _entity("C")],
    )
    await cards.create_or_update_business_card(service_group, [_entity("Only")])

    read = await cards.get_business_card_of_id(service_group.id)
    assert [e.names[0].name for e in read.entities] == ["Only"]
    async with test_session_factory() as db:
        count = await db.execute(select(func.count()).select_from(BusinessCardEntity))
        assert count.scalar_one() == 1


async def test_identical_upsert_is_idempotent(managers, service_group):
    cards = managers.business_card_mgr
    await cards.create_or_update_business_card(service_group, [_entity("Same")])
    await cards.create_or_update_business_card(service_group, [_entity("Same")])
    read = await cards.get_business_card_of_id(service_group.id)
    assert read.entity_count == 1
    assert await cards.get_business_card_count() == 1


async def test_empty_entity_list_keeps_card(managers, service_group):
    cards = managers.business_card_mgr
    await cards.create_or_update_business_card(service_group, [_entity("A")])
    stored = await cards.create_or_update_business_card(service_group, [])
    assert stored.entity_count == 0
    assert await cards.get_business_card_of_id(service_group.id) is not None


async def test_delete_card(managers, service_group):
    cards = managers.business_card_mgr
    card = await cards.create_or_update_business_card(service_group, [_entity("A")])
    assert await cards.delete_business_card(card) is True
    assert await cards.get_business_card_of_id(service_group.id) is None
    assert await cards.delete_business_card(card) is False


async def test_store_failure_returns_none(managers, service_group):
    with patch(
        "smp_directory.models.business_card_entity.BusinessCardEntity.from_domain",
        side_effect=DatabaseError("boom", "commit"),
    ):
        stored = await managers.business_card_mgr.create_or_update_business_card(
            service_group, [_entity("A")],
        )
    assert stored is None


async def test_deleting_service_group_removes_card(
    managers, service_group, test_session_factory,
):
    await managers.business_card_mgr.create_or_update_business_card(
        service_group, [_entity("A"), _entity("B")],
    )
    assert await managers.service_group_mgr.delete_service_group(
        service_group.participant_identifier,
    )
    assert await managers.business_card_mgr.get_business_card_of_id(service_group.id) is None
    async with test_session_factory() as db:
        count = await db.execute(select(func.count()).select_from(BusinessCardEntity))
        assert count.scalar_one() == 0


async def test_counts(managers, service_group, other_user):
    assert await managers.user_mgr.get_user_count() == 2
    assert await managers.service_group_mgr.get_service_group_count() == 1
    assert await managers.business_card_mgr.get_business_card_count() == 0
