"""Integration tests: patient CRUD lifecycle."""

from __future__ import annotations

from starlette.testclient import TestClient

from tests.patients._helpers import FULL_PAYLOAD, create_patient


def test_patient_crud_lifecycle_happy_path(
    client: TestClient, alice_headers: dict[str, str]
) -> None:
    """Create -> Get -> Update -> Delete -> 404."""
    patient_id = create_patient(
        client=client, headers=alice_headers, first_name="Jan", last_name="Kowalski"
    )

    get_res = client.get(f"/api/patients/{patient_id}", headers=alice_headers)
    assert get_res.status_code == 200
    assert get_res.json()["data"]["id"] == patient_id

    update_res = client.put(
        f"/api/patients/{patient_id}",
        json={"first_name": "Janusz", "last_name": "Kowalski"},
        headers=alice_headers,
    )
    assert update_res.status_code == 200
    assert update_res.json()["data"]["first_name"] == "Janusz"

    delete_res = client.delete(f"/api/patients/{patient_id}", headers=alice_headers)
    assert delete_res.status_code == 200
    assert delete_res.json() == {
        "success": True,
        "message": "Pacjent został usunięty pomyślnie",
        "data": {},
    }

    missing_res = client.get(f"/api/patients/{patient_id}", headers=alice_headers)
    assert missing_res.status_code == 404
    assert missing_res.json()["success"] is False


def test_store_minimal_patient_assigns_owner_id_and_timestamps(
    client: TestClient, alice_headers: dict[str, str], owners: dict[str, int]
) -> None:
    res = client.post(
        "/api/patients",
        json={"first_name": "Jan", "last_name": "Kowalski", "email": "jan@example.com"},
        headers=alice_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Pacjent został utworzony pomyślnie"

    data = body["data"]
    assert isinstance(data["id"], int)
    assert data["physiotherapist_id"] == owners["alice"]
    assert data["email"] == "jan@example.com"
    assert data["pesel"] is None
    assert data["born_date"] is None
    assert data["gender"] is None
    assert data["created_at"]
    assert data["updated_at"]


def test_store_round_trips_every_field(client: TestClient, alice_headers: dict[str, str]) -> None:
    res = client.post("/api/patients", json=FULL_PAYLOAD, headers=alice_headers)
    assert res.status_code == 201, res.text
    created = res.json()["data"]

    for field, value in FULL_PAYLOAD.items():
        assert created[field] == value, field

    shown = client.get(f"/api/patients/{created['id']}", headers=alice_headers).json()["data"]
    assert shown == created


def test_store_ignores_owner_and_id_in_body(
    client: TestClient, alice_headers: dict[str, str], owners: dict[str, int]
) -> None:
    res = client.post(
        "/api/patients",
        json={
            "id": 4242,
            "physiotherapist_id": owners["bob"],
            "first_name": "Jan",
            "last_name": "Kowalski",
        },
        headers=alice_headers,
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["id"] != 4242
    assert data["physiotherapist_id"] == owners["alice"]


def test_update_keeps_omitted_fields_and_clears_explicit_nulls(
    client: TestClient, alice_headers: dict[str, str]
) -> None:
    created = client.post("/api/patients", json=FULL_PAYLOAD, headers=alice_headers).json()["data"]

    res = client.patch(
        f"/api/patients/{created['id']}",
        json={"first_name": "Jan", "last_name": "Nowak", "phone": None, "gender": ""},
        headers=alice_headers,
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["message"] == "Pacjent został zaktualizowany pomyślnie"

    data = body["data"]
    assert data["last_name"] == "Nowak"
    assert data["phone"] is None
    assert data["gender"] is None
    assert data["pesel"] == FULL_PAYLOAD["pesel"]
    assert data["contact_person_email"] == FULL_PAYLOAD["contact_person_email"]


def test_show_message_and_envelope(client: TestClient, alice_headers: dict[str, str]) -> None:
    patient_id = create_patient(
        client=client, headers=alice_headers, first_name="Maria", last_name="Nowak"
    )

    res = client.get(f"/api/patients/{patient_id}", headers=alice_headers)
    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"success", "message", "data"}
    assert body["message"] == "Pacjent został pobrany pomyślnie"


def test_destroy_missing_patient_is_not_found(
    client: TestClient, alice_headers: dict[str, str]
) -> None:
    patient_id = create_patient(
        client=client, headers=alice_headers, first_name="Jan", last_name="Kowalski"
    )

    res = client.delete("/api/patients/999", headers=alice_headers)
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Nie znaleziono pacjenta", "data": {}}

    assert client.get(f"/api/patients/{patient_id}", headers=alice_headers).status_code == 200


def test_messages_follow_configured_locale(
    client: TestClient, alice_headers: dict[str, str], monkeypatch
) -> None:
    from app.core.settings import get_settings

    monkeypatch.setenv("APP_LOCALE", "en")
    get_settings.cache_clear()

    res = client.post(
        "/api/patients", json={"first_name": "Jan", "last_name": "Kowalski"}, headers=alice_headers
    )
    assert res.status_code == 201
    assert res.json()["message"] == "Patient created successfully"


def test_store_keeps_email_exactly_as_sent(
    client: TestClient, alice_headers: dict[str, str]
) -> None:
    res = client.post(
        "/api/patients",
        json={
            "first_name": "Jan",
            "last_name": "Kowalski",
            "email": "Jan.Kowalski@Example.COM",
            "contact_person_email": "Anna.Kowalska@EXAMPLE.com",
        },
        headers=alice_headers,
    )
    assert res.status_code == 201, res.text
    data = res.json()["data"]
    assert data["email"] == "Jan.Kowalski@Example.COM"
    assert data["contact_person_email"] == "Anna.Kowalska@EXAMPLE.com"

    shown = client.get(f"/api/patients/{data['id']}", headers=alice_headers).json()["data"]
    assert shown["email"] == "Jan.Kowalski@Example.COM"


def test_out_of_range_ids_are_not_found(client: TestClient, alice_headers: dict[str, str]) -> None:
    huge = "99999999999999999999999"
    missing = client.get("/api/patients/999", headers=alice_headers).json()

    responses = [
        client.get(f"/api/patients/{huge}", headers=alice_headers),
        client.put(
            f"/api/patients/{huge}",
            json={"first_name": "Jan", "last_name": "Kowalski"},
            headers=alice_headers,
        ),
        client.delete(f"/api/patients/{huge}", headers=alice_headers),
        client.get(f"/api/patients/{2**31}", headers=alice_headers),
        client.get("/api/patients/-1", headers=alice_headers),
    ]
    for res in responses:
        assert res.status_code == 404
        assert res.json() == missing
