import pytest


@pytest.fixture
def client_payload():
    return {
        "person_id": 101,
        "seller_id": 201,
        "credit_limit": 1000.5,
        "active": True,
        "notes": "Prefers contact by email.",
        "score": 750,
        "last_purchase_at": "2023-10-27T14:30:00+00:00",
        "last_purchase_amount": 150.75,
        "delinquent": False,
        "blocked": False,
    }


def test_clients_require_token(client):
    assert client.get("/clients/").status_code == 401


def test_client_crud(client, auth_headers, client_payload):
    response = client.post("/clients/", json=client_payload, headers=auth_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["person_id"] == 101
    assert created["credit_limit"] == 1000.5
    assert created["last_purchase_amount"] == 150.75

    response = client.patch(
        f"/clients/{created['id']}", json={"blocked": True}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["blocked"] is True
    assert response.json()["score"] == 750

    response = client.get("/clients/", headers=auth_headers)
    assert [c["id"] for c in response.json()] == [created["id"]]

    assert client.delete(f"/clients/{created['id']}", headers=auth_headers).status_code == 204
    assert client.get("/clients/", headers=auth_headers).json() == []


def test_missing_client_is_not_found(client, auth_headers):
    response = client.get("/clients/12345", headers=auth_headers)
    assert response.status_code == 404
    assert "\n" not in response.json()["detail"]


def test_list_clients_by_base(client, auth_headers, client_payload):
    base = client.post("/bases/", json={"name": "Matriz"}, headers=auth_headers).json()
    client.post("/clients/", json=client_payload, headers=auth_headers)
    client.post("/clients/", json={**client_payload, "person_id": 102, "base_id": base["id"]}, headers=auth_headers)

    response = client.get("/clients/", params={"base_id": base["id"]}, headers=auth_headers)
    assert [c["person_id"] for c in response.json()] == [102]


def test_client_with_unknown_base_is_bad_request(client, auth_headers, client_payload):
    response = client.post(
        "/clients/", json={**client_payload, "base_id": 999}, headers=auth_headers
    )
    assert response.status_code == 400


def test_client_validation(client, auth_headers, client_payload):
    response = client.post(
        "/clients/", json={**client_payload, "score": -1, "notes": "x" * 501}, headers=auth_headers
    )
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]] == ["notes", "score"]


def test_out_of_range_client_id_is_rejected(client, auth_headers):
    assert client.get("/clients/99999999999999999999", headers=auth_headers).status_code == 422
    assert client.delete("/clients/99999999999999999999", headers=auth_headers).status_code == 422
    response = client.get("/clients/", params={"base_id": 2**40}, headers=auth_headers)
    assert response.status_code == 422


def test_client_numbers_beyond_column_range_are_bad_request(client, auth_headers, client_payload):
    response = client.post(
        "/clients/",
        json={**client_payload, "person_id": 2**40, "credit_limit": 10**12},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == [
        {"field": "person_id", "message": "Person id is too large."},
        {"field": "credit_limit", "message": "Credit limit is too large."},
    ]
