"""Tests for the agent client search endpoint."""

from __future__ import annotations

import pytest

from models import db
from models.user import ADMIN, AGENT, CLIENT, User


@pytest.fixture()
def agent_headers(make_user, auth_headers) -> dict[str, str]:
    return auth_headers(make_user("agent@bellavista.test", role=AGENT))


def test_search_matches_clients_case_insensitively(client, make_user, agent_headers):
    gina = make_user("Gina.Guest@Example.com", name="Gina Guest", phone="555-0111")
    make_user("other@elsewhere.org", name="Other Person")
    make_user("guest-admin@example.com", role=ADMIN)

    response = client.get(
        "/agent/clients/search",
        query_string={"email": "  gina.guest@EXAMPLE  "},
        headers=agent_headers,
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "clients": [
            {
                "id": gina,
                "name": "Gina Guest",
                "email": "Gina.Guest@Example.com",
                "phone": "555-0111",
            }
        ]
    }


def test_search_only_returns_clients_and_caps_results(client, make_user, agent_headers):
    for index in range(12):
        make_user(f"guest{index:02d}@example.com")
    make_user("staff-guest@example.com", role=AGENT)

    response = client.get("/agent/clients/search?email=guest", headers=agent_headers)

    clients = response.get_json()["clients"]
    assert len(clients) == 10
    assert all(entry["email"].startswith("guest") for entry in clients)


def test_search_treats_wildcards_literally(client, make_user, agent_headers):
    make_user("plain@example.com")

    response = client.get("/agent/clients/search?email=%25", headers=agent_headers)

    assert response.status_code == 200
    assert response.get_json()["clients"] == []


@pytest.mark.parametrize("query", ["", "?email=", "?email=%20%20"])
def test_search_requires_email(client, agent_headers, query):
    response = client.get(f"/agent/clients/search{query}", headers=agent_headers)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Email query parameter is required."


@pytest.mark.parametrize("role", [CLIENT, ADMIN])
def test_search_requires_agent_role(client, make_user, auth_headers, role):
    headers = auth_headers(make_user(f"{role.lower()}@example.com", role=role))

    response = client.get("/agent/clients/search?email=example", headers=headers)

    assert response.status_code == 401
    assert response.get_json()["message"] == "Unauthorized"


def test_search_database_failure_returns_500(app, client, agent_headers, rollbacks):
    with app.app_context():
        User.__table__.drop(db.engine)

    response = client.get("/agent/clients/search?email=guest", headers=agent_headers)

    assert response.status_code == 500
    data = response.get_json()
    assert data["message"] == "Error searching for clients"
    assert "users" in data["detail"]
    assert rollbacks
