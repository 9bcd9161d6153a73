import uuid

import pytest


async def _signup(client, email="a@x.com", password="p1", name="Ann"):
    resp = await client.post("/api/v1/auth/signup", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _signin(client, email="a@x.com", password="p1"):
    return await client.post("/api/v1/auth/signin", json={"email": email, "password": password})


async def test_signup_never_exposes_password(client):
    user = await _signup(client)
    assert set(user) == {"id", "email", "name"}
    assert uuid.UUID(user["id"])
    assert user["email"] == "a@x.com"


async def test_signup_duplicate_email_conflicts(client):
    await _signup(client)
    resp = await client.post("/api/v1/auth/signup", json={"email": "a@x.com", "password": "other", "name": "Other"})
    assert resp.status_code == 409
    assert "error" in resp.json()

    users = (await client.get("/api/v1/users")).json()
    assert len(users) == 1


@pytest.mark.parametrize(
    "body",
    [
        {"email": "not-an-email", "password": "p1"},
        {"email": "a@x.com"},
        {"email": "a@x.com", "password": ""},
        {"email": "a@x.com", "password": "p1"},
        {"email": "a@x.com", "password": "p1", "name": ""},
        {"email": "a@x.com", "password": "p1", "name": "   "},
    ],
)
async def test_signup_invalid_payload(client, body):
    resp = await client.post("/api/v1/auth/signup", json=body)
    assert resp.status_code == 400


async def test_signin_and_me(client):
    user = await _signup(client)
    resp = await _signin(client)
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["token_type"] == "bearer"
    assert body["user"] == user

    resp = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert resp.status_code == 200
    assert resp.json() == user


async def test_signin_wrong_password(client):
    await _signup(client)
    resp = await _signin(client, password="wrong")
    assert resp.status_code == 401
    assert resp.json() == {"error": "invalid email or password"}
    assert "token" not in resp.json()


async def test_signin_unknown_email(client):
    resp = await _signin(client, email="ghost@x.com")
    assert resp.status_code == 401


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-jwt"}, {"Authorization": "Basic abc"}],
    ids=["missing", "invalid", "wrong-scheme"],
)
async def test_me_requires_valid_token(client, headers):
    resp = await client.get("/api/v1/users/me", headers=headers)
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert "error" in resp.json()


async def test_user_crud(client):
    user = await _signup(client)
    await _signup(client, email="b@x.com", name="Bea")

    resp = await client.get("/api/v1/users")
    assert [u["email"] for u in resp.json()] == ["a@x.com", "b@x.com"]

    resp = await client.get(f"/api/v1/users/{user['id']}")
    assert resp.json() == user

    resp = await client.patch(f"/api/v1/users/{user['id']}", json={"name": "Annie"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Annie"

    resp = await client.delete(f"/api/v1/users/{user['id']}")
    assert resp.json() == {"message": "user deleted"}
    assert (await client.get(f"/api/v1/users/{user['id']}")).status_code == 404


@pytest.mark.parametrize("body", [{"name": ""}, {"name": "   "}, {}])
async def test_patch_user_invalid_name(client, body):
    user = await _signup(client)
    resp = await client.patch(f"/api/v1/users/{user['id']}", json=body)
    assert resp.status_code == 400
    assert (await client.get(f"/api/v1/users/{user['id']}")).json()["name"] == "Ann"


async def test_user_path_must_be_uuid(client):
    resp = await client.get("/api/v1/users/42")
    assert resp.status_code == 400


async def test_unknown_user(client):
    missing = str(uuid.uuid4())
    assert (await client.get(f"/api/v1/users/{missing}")).status_code == 404
    assert (await client.patch(f"/api/v1/users/{missing}", json={"name": "x"})).status_code == 404
    assert (await client.delete(f"/api/v1/users/{missing}")).status_code == 404


async def test_signin_with_mixed_case_domain(client):
    user = await _signup(client, email="a@X.com")
    assert user["email"] == "a@x.com"

    resp = await _signin(client, email="a@X.com")
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == user["id"]


async def test_signin_malformed_email_is_bad_request(client):
    resp = await _signin(client, email="not-an-email")
    assert resp.status_code == 400
