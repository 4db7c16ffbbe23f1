"""Account Routes — end-to-end tests for the /users HTTP surface.

Tests cover:
    - POST /users: 201 without password, 409 on repeat, 400 per validator
    - GET /users/{id}: owner, other user, admin, malformed or out-of-range id, missing identity, 404
    - PUT /users/{id}: update + read back, invalid age, field filtering, guards first
    - GET /users: admin-only listing with pagination
    - Unexpected failures → generic 500 without exception text
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from account_api.api.dependencies import get_account_service
from account_api.main import app
from account_api.models.account import Account


# ─── POST /users ─────────────────────────────────────────────────

async def test_create_returns_201_without_password(register):
    res = await register("x@y.com", "abc12345")
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "x@y.com"
    assert "password" not in body["user"]


async def test_create_twice_returns_409(register):
    assert (await register("x@y.com", "abc12345")).status_code == 201
    res = await register("x@y.com", "abc12345")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_ACCOUNT"


async def test_create_stores_hashed_password(register, test_db):
    await register("x@y.com", "abc12345")
    result = await test_db.execute(select(Account).where(Account.email == "x@y.com"))
    account = result.scalar_one()
    assert account.password != "abc12345"
    assert account.password.startswith("$2")


async def test_create_with_profile_fields(register):
    res = await register("x@y.com", "abc12345", name="Ada", age=36, phone="0123456789")
    user = res.json()["user"]
    assert (user["name"], user["age"], user["phone"]) == ("Ada", 36, "0123456789")


async def test_create_rejects_invalid_email(register):
    res = await register("not-an-email", "abc12345")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid email format"
    assert res.json()["error"]["field"] == "email"


async def test_create_reports_first_violation_only(client):
    res = await client.post("/users", json={"password": "short"})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Email is required"


async def test_create_rejects_weak_password(register):
    res = await register("x@y.com", "alllettersnodigit")
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "password"


async def test_create_rejects_invalid_profile_field(register):
    res = await register("x@y.com", "abc12345", age=151)
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "age"


async def test_create_rejects_non_object_body(client):
    res = await client.post("/users", json=["x@y.com", "abc12345"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Request body must be a JSON object"


async def test_create_rejects_malformed_json(client):
    res = await client.post(
        "/users", content=b"{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400


# ─── GET /users/{id} ─────────────────────────────────────────────

async def test_owner_reads_own_profile(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    res = await client.get(f"/users/{user_id}", headers=as_user(user_id))
    assert res.status_code == 200
    assert res.json()["id"] == user_id
    assert "password" not in res.json()


async def test_other_user_forbidden(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    res = await client.get(f"/users/{user_id}", headers=as_user(user_id + 1, "user"))
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_admin_reads_other_profile(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    res = await client.get(f"/users/{user_id}", headers=as_user(user_id + 1, "admin"))
    assert res.status_code == 200


async def test_missing_identity_returns_401(register, client):
    user_id = (await register()).json()["user"]["id"]
    res = await client.get(f"/users/{user_id}")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_non_numeric_id_returns_400(client, as_user):
    res = await client.get("/users/abc", headers=as_user(5))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TARGET"


@pytest.mark.parametrize("raw_id", ["0", "2147483648", "99999999999999999999"])
async def test_out_of_range_id_returns_400(client, as_user, raw_id):
    res = await client.get(f"/users/{raw_id}", headers=as_user(1, "admin"))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TARGET"


async def test_out_of_range_caller_id_returns_401(client):
    huge = "99999999999999999999"
    res = await client.get(f"/users/{huge}", headers={"x-user-id": huge})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_authentication_checked_before_target(client):
    res = await client.get("/users/abc")
    assert res.status_code == 401


async def test_unknown_account_returns_404(client, as_user):
    res = await client.get("/users/999", headers=as_user(1, "admin"))
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"


# ─── PUT /users/{id} ─────────────────────────────────────────────

async def test_update_then_read_back(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    headers = as_user(user_id)
    res = await client.put(
        f"/users/{user_id}", json={"age": 30, "name": "Ada"}, headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Profile updated successfully"
    assert "password" not in res.json()["user"]

    profile = (await client.get(f"/users/{user_id}", headers=headers)).json()
    assert profile["age"] == 30
    assert profile["name"] == "Ada"


async def test_update_invalid_age_returns_400(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    res = await client.put(f"/users/{user_id}", json={"age": 200}, headers=as_user(user_id))
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "age"


async def test_update_ignores_email_and_password(register, client, as_user, test_db):
    user_id = (await register("x@y.com")).json()["user"]["id"]
    res = await client.put(
        f"/users/{user_id}",
        json={"email": "evil@y.com", "password": "plaintext1", "bio": "Hi"},
        headers=as_user(user_id),
    )
    assert res.status_code == 200
    assert res.json()["user"]["email"] == "x@y.com"
    assert res.json()["user"]["bio"] == "Hi"
    account = await test_db.get(Account, user_id)
    assert account.password != "plaintext1"


async def test_update_null_phone_clears_it(register, client, as_user):
    user_id = (await register(phone="0123456789")).json()["user"]["id"]
    res = await client.put(f"/users/{user_id}", json={"phone": None}, headers=as_user(user_id))
    assert res.status_code == 200
    assert res.json()["user"]["phone"] is None


async def test_update_guards_run_before_validation(register, client, as_user):
    user_id = (await register()).json()["user"]["id"]
    res = await client.put(
        f"/users/{user_id}", json={"age": 999}, headers=as_user(user_id + 1),
    )
    assert res.status_code == 403


async def test_update_unknown_account_returns_404(client, as_user):
    res = await client.put("/users/999", json={"name": "Ghost"}, headers=as_user(1, "admin"))
    assert res.status_code == 404


async def test_update_malformed_id_returns_400(client, as_user):
    res = await client.put("/users/x1", json={"name": "Ada"}, headers=as_user(1))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TARGET"


async def test_update_out_of_range_id_returns_400(client, as_user):
    res = await client.put(
        "/users/99999999999999999999", json={"name": "Ada"}, headers=as_user(1, "admin"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TARGET"


# ─── GET /users ──────────────────────────────────────────────────

async def test_admin_lists_users_newest_first(register, client, as_user):
    await register("a@y.com")
    await register("b@y.com")
    res = await client.get("/users", headers=as_user(1, "admin"))
    assert res.status_code == 200
    users = res.json()["users"]
    assert [u["email"] for u in users] == ["b@y.com", "a@y.com"]
    assert all("password" not in u for u in users)
    assert res.json()["pagination"] == {"skip": 0, "take": 10}


async def test_list_pagination(register, client, as_user):
    for name in ("a", "b", "c"):
        await register(f"{name}@y.com")
    res = await client.get("/users?skip=1&take=1", headers=as_user(1, "admin"))
    assert [u["email"] for u in res.json()["users"]] == ["b@y.com"]


async def test_list_take_is_capped(client, as_user):
    res = await client.get("/users?take=100000", headers=as_user(1, "admin"))
    assert res.status_code == 200
    assert res.json()["pagination"]["take"] == 100


async def test_list_rejects_negative_skip(client, as_user):
    res = await client.get("/users?skip=-1", headers=as_user(1, "admin"))
    assert res.status_code == 400


async def test_list_requires_admin(client, as_user):
    assert (await client.get("/users", headers=as_user(1, "user"))).status_code == 403
    assert (await client.get("/users")).status_code == 401


# ─── Unexpected failures ─────────────────────────────────────────

async def test_unexpected_error_returns_generic_500(as_user):
    class ExplodingService:
        async def get_profile(self, account_id):
            raise RuntimeError("connection string postgres://secret")

    app.dependency_overrides[get_account_service] = lambda: ExplodingService()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            res = await c.get("/users/1", headers=as_user(1))
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text
    assert "Traceback" not in res.text
