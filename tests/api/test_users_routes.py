"""Users Routes: verifies status codes and bodies of the /users endpoints.

Invariants:
    - POST returns 201 with the store-assigned id and defaults
    - Missing required fields and duplicate ids → 400; unknown ids → 404
    - Query filters follow the ?active= semantics of each endpoint
"""

from datetime import datetime

import pytest


# ==============================================================================
# Reads
# ==============================================================================


async def test_list_users_returns_all(client):
    res = await client.get("/users")
    assert res.status_code == 200
    assert [u["id"] for u in res.json()] == [1, 2, 3, 4, 5]


async def test_list_users_active_query(client):
    active = (await client.get("/users", params={"active": "true"})).json()
    inactive = (await client.get("/users", params={"active": "false"})).json()
    assert [u["name"] for u in active] == ["Rahul", "Aditi", "Amit"]
    assert [u["name"] for u in inactive] == ["Priya", "Sneha"]


async def test_list_users_any_other_active_value_means_inactive(client):
    res = await client.get("/users", params={"active": "yes"})
    assert [u["name"] for u in res.json()] == ["Priya", "Sneha"]


async def test_list_active_users(client):
    res = await client.get("/users/active")
    assert res.status_code == 200
    assert all(u["isActive"] for u in res.json())
    assert len(res.json()) == 3


async def test_users_older_than(client):
    res = await client.get("/users/age/25")
    body = res.json()
    assert res.status_code == 200
    assert body["count"] == 3
    assert [u["name"] for u in body["users"]] == ["Aditi", "Amit", "Sneha"]


async def test_users_older_than_active_only(client):
    res = await client.get("/users/age/25", params={"active": "true"})
    assert res.json()["count"] == 2


async def test_users_older_than_invalid_age(client):
    res = await client.get("/users/age/old")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid age"


async def test_users_older_than_huge_age_matches_nobody(client):
    res = await client.get("/users/age/99999999999999999999")
    assert res.status_code == 200
    assert res.json() == {"count": 0, "users": []}


async def test_users_older_than_huge_negative_age_matches_everyone(client):
    res = await client.get("/users/age/-99999999999999999999")
    assert res.json()["count"] == 5


async def test_get_user(client):
    res = await client.get("/users/3")
    assert res.status_code == 200
    assert res.json()["name"] == "Priya"


async def test_get_unknown_user_404(client):
    res = await client.get("/users/42")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_user_non_integer_id_400(client):
    res = await client.get("/users/abc")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_out_of_range_user_id_400(client, method):
    path = "/users/99999999999999999999"
    if method == "PATCH":
        path += "/toggle-active"
    res = await client.request(
        method, path, json={"age": 1} if method == "PUT" else None,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ==============================================================================
# Create
# ==============================================================================


async def test_create_user_assigns_next_id(client):
    res = await client.post("/users", json={"name": "Zoe", "email": "z@x.com"})
    body = res.json()

    assert res.status_code == 201
    assert body["id"] == 6
    assert body["name"] == "Zoe"
    assert body["email"] == "z@x.com"
    assert body["age"] == 0
    assert body["isActive"] is True
    datetime.fromisoformat(body["createdAt"])


async def test_create_user_missing_email_400(client):
    res = await client.post("/users", json={"name": "Zoe"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"
    assert res.json()["error"]["message"] == "email is required"


async def test_create_user_bad_age_type_400(client):
    res = await client.post(
        "/users", json={"name": "Zoe", "email": "z@x.com", "age": "old"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_user_out_of_range_age_400(client):
    res = await client.post(
        "/users", json={"name": "Zoe", "email": "z@x.com", "age": 10**20},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert len((await client.get("/users")).json()) == 5


async def test_update_user_out_of_range_age_400(client):
    res = await client.put("/users/2", json={"age": 10**20})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_user_id_collision_is_400_conflict(client, seeded_users, monkeypatch):
    async def stale_identifier():
        return 5

    monkeypatch.setattr(seeded_users, "next_identifier", stale_identifier)

    res = await client.post("/users", json={"name": "Zoe", "email": "z@x.com"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "CONFLICT"
    assert res.json()["error"]["message"] == "Duplicate ID"


# ==============================================================================
# Update / toggle / delete
# ==============================================================================


async def test_update_user_ignores_id(client):
    res = await client.put("/users/2", json={"id": 99, "age": 31})
    assert res.status_code == 200
    assert res.json()["id"] == 2
    assert res.json()["age"] == 31
    assert (await client.get("/users/99")).status_code == 404


async def test_update_user_null_name_400(client):
    res = await client.put("/users/2", json={"name": None})
    assert res.status_code == 400


async def test_update_user_is_active_by_json_name(client):
    res = await client.put("/users/1", json={"isActive": False})
    assert res.json()["isActive"] is False


async def test_update_unknown_user_404(client):
    res = await client.put("/users/42", json={"age": 1})
    assert res.status_code == 404


async def test_toggle_active(client):
    res = await client.patch("/users/3/toggle-active")
    assert res.status_code == 200
    assert res.json() == {"message": "User activated", "isActive": True}

    res = await client.patch("/users/3/toggle-active")
    assert res.json() == {"message": "User deactivated", "isActive": False}


async def test_toggle_unknown_user_404(client):
    res = await client.patch("/users/42/toggle-active")
    assert res.status_code == 404


async def test_delete_user_then_404(client):
    res = await client.delete("/users/5")
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully"}

    res = await client.delete("/users/5")
    assert res.status_code == 404
