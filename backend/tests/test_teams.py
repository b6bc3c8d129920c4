from fastapi.testclient import TestClient

from lems.realtime.hub import hub


def test_get_teams_ordered_by_number(client: TestClient, seeded_event):
    event = seeded_event["event"]
    response = client.get(f"/api/events/{event.id}/teams")

    assert response.status_code == 200
    assert [t["number"] for t in response.json()] == [101, 202, 303]
    assert all(t["registered"] is False for t in response.json())


def test_get_teams_missing_event(client: TestClient):
    assert client.get("/api/events/999/teams").status_code == 404


def test_create_team_and_duplicate_number(client: TestClient, seeded_event):
    event = seeded_event["event"]

    created = client.post(f"/api/events/{event.id}/teams", json={"number": 404, "name": "Pistons"})
    assert created.status_code == 201
    assert created.json()["name"] == "Pistons"

    duplicate = client.post(f"/api/events/{event.id}/teams", json={"number": 404, "name": "Other"})
    assert duplicate.status_code == 409


def test_update_team_keeps_identity(client: TestClient, seeded_event):
    event = seeded_event["event"]
    team = seeded_event["teams"][0]

    response = client.patch(f"/api/events/{event.id}/teams/{team.id}", json={"affiliation_city": "Haifa"})

    assert response.status_code == 200
    assert response.json()["id"] == team.id
    assert response.json()["affiliation_city"] == "Haifa"
    assert response.json()["name"] == "Gears"


def test_update_team_wrong_event(client: TestClient, seeded_event):
    team = seeded_event["teams"][0]
    response = client.patch(f"/api/events/999/teams/{team.id}", json={"name": "X"})
    assert response.status_code == 404


def test_register_team_broadcasts_full_team(client: TestClient, seeded_event, monkeypatch):
    event = seeded_event["event"]
    team = seeded_event["teams"][1]
    sent = []

    async def fake_broadcast(event_id, name, data, room=None):
        sent.append((event_id, name, data, room))
        return 1

    monkeypatch.setattr(hub, "broadcast", fake_broadcast)

    response = client.post(f"/api/events/{event.id}/teams/{team.id}/register")

    assert response.status_code == 200
    assert response.json()["registered"] is True
    assert len(sent) == 1
    event_id, name, data, room = sent[0]
    assert (event_id, name, room) == (event.id, "teamRegistered", "pit-admin")
    assert data.id == team.id
    assert data.registered is True

    teams = client.get(f"/api/events/{event.id}/teams").json()
    assert [t["registered"] for t in teams] == [False, True, False]


def test_register_unknown_team(client: TestClient, seeded_event):
    event = seeded_event["event"]
    assert client.post(f"/api/events/{event.id}/teams/999/register").status_code == 404
