"""Smoke tests — the user endpoints over an in-memory repository"""
import pytest

SF = {"lat": 37.7749, "lng": -122.4194}


def _create(client, username, location=None, **extra):
    body = {
        "username": username,
        "password": "secret123",
        "display_name": username.title(),
        "age": 28,
        **extra,
    }
    if location:
        body["location"] = location
    r = client.post("/api/v1/users", json=body)
    assert r.status_code == 201, r.text
    return r.json()


class TestHealthAndMeta:
    def test_health(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.json()["storage"] == "memory"

    def test_openapi(self, client):
        r = client.get("/openapi.json")
        assert r.status_code == 200


class TestUsers:
    def test_create_hides_password(self, client):
        user = _create(client, "alex")
        assert user["username"] == "alex"
        assert "password" not in user
        assert "password_hash" not in user
        assert user["max_distance"] == 5

    def test_duplicate_username(self, client):
        _create(client, "alex")
        r = client.post("/api/v1/users", json={
            "username": "alex", "password": "secret123", "display_name": "A", "age": 30,
        })
        assert r.status_code == 409

    def test_underage_rejected(self, client):
        r = client.post("/api/v1/users", json={
            "username": "kid", "password": "secret123", "display_name": "K", "age": 16,
        })
        assert r.status_code == 422

    def test_get_and_not_found(self, client):
        user = _create(client, "alex")
        assert client.get(f"/api/v1/users/{user['id']}").json()["username"] == "alex"
        assert client.get("/api/v1/users/missing").status_code == 404

    def test_update_profile(self, client):
        user = _create(client, "alex")
        r = client.patch(f"/api/v1/users/{user['id']}/profile",
                         json={"show_on_map": False, "max_distance": 10})
        assert r.status_code == 200
        assert r.json()["show_on_map"] is False
        assert r.json()["max_distance"] == 10
        assert r.json()["display_name"] == "Alex"

    def test_update_profile_rejects_bad_radius(self, client):
        user = _create(client, "alex")
        r = client.patch(f"/api/v1/users/{user['id']}/profile", json={"max_distance": 0})
        assert r.status_code == 422

    @pytest.mark.parametrize("field", ["display_name", "age", "show_on_map"])
    def test_update_profile_rejects_null(self, client, field):
        user = _create(client, "alex")
        r = client.patch(f"/api/v1/users/{user['id']}/profile", json={field: None})
        assert r.status_code == 422
        assert client.get(f"/api/v1/users/{user['id']}").json()[field] is not None

    def test_null_radius_resets_to_default(self, client):
        me = _create(client, "me", SF, max_distance=1)
        _create(client, "b", {"lat": 37.8000, "lng": -122.4194})
        r = client.patch(f"/api/v1/users/{me['id']}/profile", json={"max_distance": None})
        assert r.status_code == 200
        assert r.json()["max_distance"] is None
        nearby = client.get(f"/api/v1/users/{me['id']}/nearby").json()
        assert [u["username"] for u in nearby] == ["b"]


class TestLocation:
    def test_update_location(self, client):
        user = _create(client, "alex")
        r = client.patch(f"/api/v1/users/{user['id']}/location", json=SF)
        assert r.status_code == 200
        assert r.json()["message"] == "Location updated"
        assert client.get(f"/api/v1/users/{user['id']}").json()["location"] == SF

    def test_out_of_range_rejected(self, client):
        user = _create(client, "alex")
        r = client.patch(f"/api/v1/users/{user['id']}/location", json={"lat": 91, "lng": 0})
        assert r.status_code == 422
        r = client.patch(f"/api/v1/users/{user['id']}/location", json={"lat": 0, "lng": -181})
        assert r.status_code == 422

    def test_unknown_user(self, client):
        r = client.patch("/api/v1/users/missing/location", json=SF)
        assert r.status_code == 404


class TestNearby:
    def test_nearby(self, client):
        me = _create(client, "me", SF)
        _create(client, "a", {"lat": 37.7800, "lng": -122.4200})
        _create(client, "la", {"lat": 34.0522, "lng": -118.2437})
        _create(client, "hidden", {"lat": 37.7750, "lng": -122.4195}, show_on_map=False)
        _create(client, "b", {"lat": 37.8000, "lng": -122.4194})

        r = client.get(f"/api/v1/users/{me['id']}/nearby")
        assert r.status_code == 200
        results = r.json()
        assert [u["username"] for u in results] == ["a", "b"]
        assert results[0]["distance"] == 0.4
        assert all("password_hash" not in u for u in results)
        dists = [u["distance"] for u in results]
        assert dists == sorted(dists)

    def test_location_not_set(self, client):
        me = _create(client, "me")
        r = client.get(f"/api/v1/users/{me['id']}/nearby")
        assert r.status_code == 400
        assert r.json()["detail"] == "Location not set"

    def test_nobody_nearby_is_empty_list(self, client):
        me = _create(client, "me", SF)
        r = client.get(f"/api/v1/users/{me['id']}/nearby")
        assert r.status_code == 200
        assert r.json() == []

    def test_unknown_user(self, client):
        assert client.get("/api/v1/users/missing/nearby").status_code == 404

    def test_radius_change_applies(self, client):
        me = _create(client, "me", SF)
        _create(client, "b", {"lat": 37.8000, "lng": -122.4194})
        client.patch(f"/api/v1/users/{me['id']}/profile", json={"max_distance": 1})
        assert client.get(f"/api/v1/users/{me['id']}/nearby").json() == []
