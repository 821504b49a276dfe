"""Appointment API tests."""

import pytest

from taskify.metrics import APPOINTMENTS_CREATED, metrics


@pytest.fixture
async def alice(register_user):
    _, headers = await register_user("alice")
    return headers


@pytest.fixture
async def bob(register_user):
    _, headers = await register_user("bob")
    return headers


@pytest.fixture
async def appointment(client, alice):
    resp = await client.post(
        "/api/appointments",
        json={"subject": "Dentist", "date": "2030-03-14T09:30:00"},
        headers=alice,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_create_appointment(client, alice, appointment):
    assert appointment["subject"] == "Dentist"
    assert appointment["date"] == "2030-03-14T09:30:00"
    assert metrics.get(APPOINTMENTS_CREATED) == 1


@pytest.mark.asyncio
async def test_create_appointment_normalizes_timezone(client, alice):
    resp = await client.post(
        "/api/appointments",
        json={"subject": "Call", "date": "2030-03-14T10:30:00+01:00"},
        headers=alice,
    )
    assert resp.status_code == 201
    assert resp.json()["date"] == "2030-03-14T09:30:00"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"subject": "No date"},
        {"date": "2030-03-14T09:30:00"},
        {"subject": "", "date": "2030-03-14T09:30:00"},
        {"subject": " ", "date": "2030-03-14T09:30:00"},
        {"subject": "Bad date", "date": "next tuesday"},
    ],
)
async def test_create_appointment_validation(client, alice, payload):
    resp = await client.post("/api/appointments", json=payload, headers=alice)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_and_get(client, alice, appointment):
    listed = (await client.get("/api/appointments", headers=alice)).json()
    assert [a["id"] for a in listed] == [appointment["id"]]

    resp = await client.get(f"/api/appointments/{appointment['id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["subject"] == "Dentist"


@pytest.mark.asyncio
async def test_partial_update_subject_only(client, alice, appointment):
    resp = await client.put(
        f"/api/appointments/{appointment['id']}",
        json={"subject": "Orthodontist"},
        headers=alice,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["subject"] == "Orthodontist"
    assert body["date"] == "2030-03-14T09:30:00"


@pytest.mark.asyncio
async def test_partial_update_date_only(client, alice, appointment):
    resp = await client.patch(
        f"/api/appointments/{appointment['id']}",
        json={"date": "2030-04-01T08:00:00"},
        headers=alice,
    )
    assert resp.status_code == 200
    assert resp.json()["subject"] == "Dentist"
    assert resp.json()["date"] == "2030-04-01T08:00:00"


@pytest.mark.asyncio
async def test_delete_appointment(client, alice, appointment):
    resp = await client.delete(f"/api/appointments/{appointment['id']}", headers=alice)
    assert resp.status_code == 204
    assert (await client.get("/api/appointments", headers=alice)).json() == []


@pytest.mark.asyncio
async def test_other_users_appointment_is_not_found(client, alice, bob, appointment):
    path = f"/api/appointments/{appointment['id']}"

    assert (await client.get("/api/appointments", headers=bob)).json() == []

    foreign = await client.get(path, headers=bob)
    missing = await client.get("/api/appointments/424242", headers=bob)
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Appointment not found"}

    assert (await client.put(path, json={"subject": "x"}, headers=bob)).status_code == 404
    assert (await client.delete(path, headers=bob)).status_code == 404

    still_there = await client.get(path, headers=alice)
    assert still_there.json()["subject"] == "Dentist"


@pytest.mark.asyncio
async def test_update_rejects_blank_subject(client, alice, appointment):
    resp = await client.patch(
        f"/api/appointments/{appointment['id']}", json={"subject": "  "}, headers=alice
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_huge_id_is_not_found(client, alice):
    url = "/api/appointments/99999999999999999999"
    for resp in (
        await client.get(url, headers=alice),
        await client.put(url, json={"subject": "x"}, headers=alice),
        await client.delete(url, headers=alice),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Appointment not found"}
