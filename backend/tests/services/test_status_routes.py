"""Status, statistics and health routes."""

import base64

import smp_directory.infrastructure.database as db_module

SG_ID = "iso6523-actorid-upis::0088:5798000000001"


async def test_status_reports_counts(client, service_group):
    res = await client.get("/api/v1/status")
    assert res.status_code == 200
    body = res.json()
    assert body["identifier_type"] == "peppol"
    assert body["directory_integration_enabled"] is True
    assert body["user_count"] == 1
    assert body["service_group_count"] == 1
    assert body["business_card_count"] == 0


async def test_statistics_track_business_card_calls(client, service_group):
    before = (await client.get("/api/v1/statistics/businesscard")).json()
    await client.get(f"/api/v1/businesscard/{SG_ID}")

    after = (await client.get("/api/v1/statistics/businesscard")).json()
    calls_before = before["invocations"].get("getBusinessCard", 0)
    assert after["invocations"]["getBusinessCard"] == calls_before + 1
    # no card yet: 404, not a success
    assert after["successes"].get("getBusinessCard", 0) == (
        before["successes"].get("getBusinessCard", 0)
    )


async def test_statistics_list_all_counters(client, service_group):
    token = base64.b64encode(b"owner:owner-secret").decode()
    await client.delete(
        f"/api/v1/businesscard/{SG_ID}", headers={"Authorization": f"Basic {token}"},
    )
    counters = (await client.get("/api/v1/statistics")).json()["counters"]
    assert counters["BusinessCardServerAPI$call"]["deleteBusinessCard"] >= 1


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "alive"
    assert res.json()["smp_id"]


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "ok", "managers": "ok"}


async def test_not_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"]["database"] == "not_initialized"


async def test_not_ready_without_managers(client):
    from smp_directory.main import app

    managers = app.state.smp_managers
    del app.state.smp_managers
    try:
        res = await client.get("/api/v1/health/ready")
    finally:
        app.state.smp_managers = managers
    assert res.status_code == 503
    assert res.json()["checks"]["managers"] == "not_initialized"
