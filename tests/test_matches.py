"""Match API tests."""

from conftest import future_date


def test_match_lifecycle(client, make_user, match_payload):
    """Test create, join until full, leave, cancel and the closed roster."""
    alice = make_user("alice", "secret1")
    bob = make_user("bob")
    carol = make_user("carol")

    response = client.post("/matches", json=match_payload(max_players=2), headers=alice)
    assert response.status_code == 201
    match = response.json()["data"]
    match_id = match["id"]
    assert match["status"] == "open"
    assert match["host_username"] == "alice"
    assert match["available_spots"] == 1
    assert [player["username"] for player in match["players"]] == ["alice"]

    response = client.post(f"/matches/{match_id}/join", headers=bob)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "full"
    assert response.json()["data"]["is_full"] is True

    response = client.post(f"/matches/{match_id}/join", headers=carol)
    assert response.status_code == 400
    assert response.json()["message"] == "Match is full"

    response = client.post(f"/matches/{match_id}/leave", headers=bob)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "open"

    response = client.delete(f"/matches/{match_id}", headers=alice)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "cancelled"

    response = client.post(f"/matches/{match_id}/join", headers=carol)
    assert response.status_code == 400
    assert response.json()["message"] == "Match is not accepting new players"


def test_create_match_requires_auth(client, match_payload):
    response = client.post("/matches", json=match_payload())
    assert response.status_code == 401


def test_create_match_in_past(client, auth_headers, match_payload):
    payload = match_payload(scheduled_date="2020-01-01T18:00:00Z")
    response = client.post("/matches", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Scheduled date must be in the future"


def test_create_match_invalid_capacity(client, auth_headers, match_payload):
    response = client.post("/matches", json=match_payload(max_players=1), headers=auth_headers)
    assert response.status_code == 400


def test_get_match(client, auth_headers, match_payload):
    match_id = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"][
        "id"
    ]

    response = client.get(f"/matches/{match_id}")
    assert response.status_code == 200
    assert response.json()["data"]["game_name"] == "Catan"


def test_get_missing_match(client):
    response = client.get("/matches/999999")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Match not found", "error": None}


def test_join_own_match(client, auth_headers, match_payload):
    match_id = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"][
        "id"
    ]
    response = client.post(f"/matches/{match_id}/join", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "You are already in this match"


def test_host_cannot_leave(client, auth_headers, match_payload):
    match_id = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"][
        "id"
    ]
    response = client.post(f"/matches/{match_id}/leave", headers=auth_headers)
    assert response.status_code == 400


def test_cancel_by_non_host(client, auth_headers, make_user, match_payload):
    match_id = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"][
        "id"
    ]
    response = client.delete(f"/matches/{match_id}", headers=make_user("mallory"))
    assert response.status_code == 403


def test_update_match(client, auth_headers, make_user, match_payload):
    """Test host metadata edits and the capacity guard."""
    match_id = client.post(
        "/matches", json=match_payload(max_players=3), headers=auth_headers
    ).json()["data"]["id"]
    client.post(f"/matches/{match_id}/join", headers=make_user("bob"))

    response = client.put(
        f"/matches/{match_id}", json={"title": "Renamed", "max_players": 2}, headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Renamed"
    assert data["status"] == "full"

    response = client.put(f"/matches/{match_id}", json={"max_players": 1}, headers=auth_headers)
    assert response.status_code == 400


def test_start_and_complete(client, auth_headers, match_payload):
    match_id = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"][
        "id"
    ]

    response = client.post(f"/matches/{match_id}/start", headers=auth_headers)
    assert response.json()["data"]["status"] == "in-progress"

    response = client.put(f"/matches/{match_id}", json={"title": "Late"}, headers=auth_headers)
    assert response.status_code == 400

    response = client.post(f"/matches/{match_id}/complete", headers=auth_headers)
    assert response.json()["data"]["status"] == "completed"

    response = client.delete(f"/matches/{match_id}", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot cancel completed match"


def test_list_matches_filters(client, auth_headers, make_game, match_payload):
    """Test listing hides cancelled matches and applies filters."""
    first = client.post(
        "/matches", json=match_payload(tags=["casual", "beginner-friendly"]), headers=auth_headers
    ).json()["data"]
    client.post(
        "/matches",
        json=match_payload(title="Later", scheduled_date=future_date(10).isoformat()),
        headers=auth_headers,
    )
    cancelled = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"]
    client.delete(f"/matches/{cancelled['id']}", headers=auth_headers)

    other_game = make_game("Wingspan")
    client.post("/matches", json=match_payload(game_id=other_game), headers=auth_headers)

    response = client.get("/matches")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pagination"] == {"current": 1, "pages": 1, "total": 3}
    assert cancelled["id"] not in [match["id"] for match in data["matches"]]

    response = client.get("/matches", params={"tags": "beginner-friendly"})
    assert [match["id"] for match in response.json()["data"]["matches"]] == [first["id"]]

    response = client.get("/matches", params={"game_id": other_game})
    assert response.json()["data"]["pagination"]["total"] == 1

    response = client.get("/matches", params={"status": "cancelled"})
    assert [match["id"] for match in response.json()["data"]["matches"]] == [cancelled["id"]]

    response = client.get("/matches", params={"date_from": future_date(7).isoformat()})
    assert [match["title"] for match in response.json()["data"]["matches"]] == ["Later"]

    response = client.get("/matches", params={"limit": 2, "page": 2})
    data = response.json()["data"]
    assert len(data["matches"]) == 1
    assert data["pagination"] == {"current": 2, "pages": 2, "total": 3}


def test_list_matches_by_distance(client, auth_headers, match_payload):
    """Test proximity filtering with haversine distances."""
    berlin = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"]
    munich_location = {
        "latitude": 48.1351,
        "longitude": 11.582,
        "address": "Marienplatz 1",
        "venue": "Spielcafe",
        "city": "Munich",
    }
    client.post("/matches", json=match_payload(location=munich_location), headers=auth_headers)

    # Potsdam is about 27 km from central Berlin and about 500 km from Munich
    response = client.get(
        "/matches", params={"latitude": 52.3906, "longitude": 13.0645, "max_distance": 50}
    )
    matches = response.json()["data"]["matches"]
    assert [match["id"] for match in matches] == [berlin["id"]]
    assert 20 < matches[0]["distance_km"] < 35


def test_list_matches_invalid_coordinates(client):
    response = client.get("/matches", params={"latitude": 120, "longitude": 0})
    assert response.status_code == 400


def test_my_matches(client, auth_headers, make_user, match_payload):
    bob = make_user("bob")
    hosted = client.post("/matches", json=match_payload(), headers=auth_headers).json()["data"]
    joined = client.post("/matches", json=match_payload(), headers=bob).json()["data"]
    client.post("/matches", json=match_payload(), headers=bob)
    client.post(f"/matches/{joined['id']}/join", headers=auth_headers)

    response = client.get("/matches/mine", headers=auth_headers)
    assert response.status_code == 200
    ids = sorted(match["id"] for match in response.json()["data"]["matches"])
    assert ids == sorted([hosted["id"], joined["id"]])
