"""Tests for FastAPI endpoints."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from pymongo.errors import PyMongoError

from folio.db.memory_store import MemoryStore
from folio.db.store import USERS
from folio.main import create_app
from tests.conftest import PASSWORD, register


class UnreachableStore(MemoryStore):
    """Accepts writes but fails every listing as if the database went away."""

    async def find(self, collection, filters=None, sort=None):
        raise PyMongoError("connection closed")


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Folio API"


@pytest.mark.asyncio
async def test_health_endpoint(client):
    """Test health endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_protected_route_without_token(client):
    """Missing token is rejected before the handler runs."""
    response = await client.get("/api/posts")
    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


@pytest.mark.asyncio
async def test_protected_route_with_bad_token(client):
    response = await client.get("/api/posts", headers={"x-auth-token": "abc.def.ghi"})
    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
async def test_register_validation_errors(client):
    """Field errors come back as a list of field/message pairs."""
    response = await client.post(
        "/api/user",
        json={"name": "", "email": "not-an-email", "password": "short"},
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"name", "email", "password"}


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    await register(client, "Ada", "ada@mail.com")
    response = await client.post(
        "/api/user",
        json={"name": "Ada again", "email": "ada@mail.com", "password": PASSWORD},
    )
    assert response.status_code == 409
    assert response.json() == {"msg": "User already exists"}


@pytest.mark.asyncio
async def test_concurrent_registrations_create_one_user(client, store):
    """Two sign-ups racing on the same email: one wins, the other conflicts."""
    body = {"name": "Ada", "email": "ada@mail.com", "password": PASSWORD}

    responses = await asyncio.gather(
        client.post("/api/user", json=body),
        client.post("/api/user", json=body),
    )

    assert sorted(response.status_code for response in responses) == [200, 409]
    assert len(await store.find(USERS, {"email": "ada@mail.com"})) == 1


@pytest.mark.asyncio
async def test_login_and_current_user(client):
    await register(client, "Ada", "ada@mail.com")

    response = await client.post("/api/auth", json={"email": "ada@mail.com", "password": PASSWORD})
    assert response.status_code == 200
    headers = {"x-auth-token": response.json()["token"]}

    response = await client.get("/api/auth", headers=headers)
    assert response.status_code == 200
    user = response.json()["data"]
    assert user["name"] == "Ada"
    assert user["avatar"].startswith("https://www.gravatar.com/avatar/")
    assert "password" not in user


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    await register(client, "Ada", "ada@mail.com")

    wrong_password = await client.post("/api/auth", json={"email": "ada@mail.com", "password": "Nope1234"})
    unknown_email = await client.post("/api/auth", json={"email": "bob@mail.com", "password": PASSWORD})

    assert wrong_password.status_code == 400
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.asyncio
async def test_post_like_and_delete_scenario(client):
    """Register, post, like from another user, delete, then the post is gone."""
    ada = await register(client, "Ada", "ada@mail.com")
    bob = await register(client, "Bob", "bob@mail.com")
    me = (await client.get("/api/auth", headers=ada)).json()["data"]

    response = await client.post("/api/posts", json={"text": "hello"}, headers=ada)
    assert response.status_code == 200
    post = response.json()["data"]
    assert post["text"] == "hello"
    assert post["name"] == me["name"]
    assert post["avatar"] == me["avatar"]

    response = await client.put(f"/api/posts/like/{post['id']}", headers=bob)
    assert response.status_code == 200
    assert len(response.json()["data"]) == 1

    response = await client.put(f"/api/posts/like/{post['id']}", headers=bob)
    assert response.status_code == 409
    assert response.json() == {"msg": "Post already liked"}

    response = await client.delete(f"/api/posts/{post['id']}", headers=bob)
    assert response.status_code == 403

    response = await client.delete(f"/api/posts/{post['id']}", headers=ada)
    assert response.status_code == 200
    assert response.json() == {"msg": "Post removed"}

    response = await client.get(f"/api/posts/{post['id']}", headers=ada)
    assert response.status_code == 404
    assert response.json() == {"msg": "Post not found"}


@pytest.mark.asyncio
async def test_malformed_post_id_is_not_found(client):
    ada = await register(client, "Ada", "ada@mail.com")

    response = await client.get("/api/posts/not-an-id", headers=ada)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unlike_never_liked_post(client):
    ada = await register(client, "Ada", "ada@mail.com")
    post = (await client.post("/api/posts", json={"text": "hello"}, headers=ada)).json()["data"]

    response = await client.put(f"/api/posts/unlike/{post['id']}", headers=ada)

    assert response.status_code == 400
    assert response.json() == {"msg": "Post has not yet been liked"}


@pytest.mark.asyncio
async def test_comment_lifecycle(client):
    ada = await register(client, "Ada", "ada@mail.com")
    bob = await register(client, "Bob", "bob@mail.com")
    post = (await client.post("/api/posts", json={"text": "hello"}, headers=ada)).json()["data"]

    response = await client.post(f"/api/posts/comment/{post['id']}", json={"text": "nice"}, headers=bob)
    assert response.status_code == 200
    comment = response.json()["data"][0]
    assert comment["name"] == "Bob"

    response = await client.post(f"/api/posts/comment/{post['id']}", json={"text": "  "}, headers=bob)
    assert response.status_code == 400

    response = await client.delete(f"/api/posts/comment/{post['id']}/{comment['id']}", headers=ada)
    assert response.status_code == 403

    response = await client.delete(f"/api/posts/comment/{post['id']}/missing", headers=bob)
    assert response.status_code == 404
    assert response.json() == {"msg": "Comment does not exist"}

    response = await client.delete(f"/api/posts/comment/{post['id']}/{comment['id']}", headers=bob)
    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.asyncio
async def test_projects_share_the_content_routes(client):
    ada = await register(client, "Ada", "ada@mail.com")

    response = await client.post("/api/projects", json={"title": "Folio"}, headers=ada)
    assert response.status_code == 400

    response = await client.post(
        "/api/projects",
        json={"title": "Folio", "description": "Profiles API"},
        headers=ada,
    )
    project = response.json()["data"]
    response = await client.put(f"/api/projects/like/{project['id']}", headers=ada)
    assert response.json()["data"][0]["user"] == project["user"]

    response = await client.get("/api/projects", headers=ada)
    assert [item["title"] for item in response.json()["data"]] == ["Folio"]


@pytest.mark.asyncio
async def test_profile_upsert_and_experience_order(client):
    ada = await register(client, "Ada", "ada@mail.com")

    response = await client.get("/profile/me", headers=ada)
    assert response.status_code == 404

    response = await client.post(
        "/profile",
        json={"status": "Developer", "skills": "node, react , sql", "twitter": "https://twitter.com/ada"},
        headers=ada,
    )
    assert response.status_code == 200
    profile = response.json()["data"]
    assert profile["skills"] == ["node", "react", "sql"]
    assert profile["social"] == {"twitter": "https://twitter.com/ada"}

    for title, start in (("Junior", "2018-01-01"), ("Senior", "2021-06-01")):
        response = await client.put(
            "/profile/experience",
            json={"title": title, "company": "Acme", "from": start},
            headers=ada,
        )
        assert response.status_code == 200

    response = await client.get("/profile/me", headers=ada)
    profile = response.json()["data"]
    assert [entry["title"] for entry in profile["experience"]] == ["Senior", "Junior"]
    assert profile["experience"][0]["from"] == "2021-06-01"
    assert profile["user"]["name"] == "Ada"

    senior_id = profile["experience"][0]["id"]
    response = await client.delete(f"/profile/experience/{senior_id}", headers=ada)
    assert [entry["title"] for entry in response.json()["data"]["experience"]] == ["Junior"]

    response = await client.delete(f"/profile/experience/{senior_id}", headers=ada)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_profile_requires_status_and_skills(client):
    ada = await register(client, "Ada", "ada@mail.com")

    response = await client.post("/profile", json={"company": "Acme"}, headers=ada)

    assert response.status_code == 400
    assert {error["field"] for error in response.json()["errors"]} == {"status", "skills"}


@pytest.mark.asyncio
async def test_public_profile_routes(client):
    ada = await register(client, "Ada", "ada@mail.com")
    await client.post("/profile", json={"status": "Developer", "skills": "python"}, headers=ada)
    user_id = (await client.get("/api/auth", headers=ada)).json()["data"]["id"]

    response = await client.get("/profile")
    assert [profile["user"]["id"] for profile in response.json()["data"]] == [user_id]

    response = await client.get(f"/profile/user/{user_id}")
    assert response.status_code == 200

    response = await client.get("/profile/user/not-an-id")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_account_removes_profile_posts_and_user(client):
    ada = await register(client, "Ada", "ada@mail.com")
    bob = await register(client, "Bob", "bob@mail.com")
    await client.post("/profile", json={"status": "Developer", "skills": "python"}, headers=ada)
    await client.post("/api/posts", json={"text": "hello"}, headers=ada)

    response = await client.delete("/profile", headers=ada)
    assert response.json() == {"msg": "Profile and User Deleted"}

    assert (await client.get("/api/posts", headers=bob)).json()["data"] == []
    assert (await client.get("/profile")).json()["data"] == []
    # The token outlives the user until it expires
    response = await client.get("/api/auth", headers=ada)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_chart(client):
    ada = await register(client, "Ada", "ada@mail.com")

    response = await client.post(
        "/api/chart",
        json={"chartName": "Sales", "chartType": "bar", "createdBy": "ada"},
        headers=ada,
    )

    assert response.status_code == 200
    chart = response.json()["data"]
    assert chart["chartId"].startswith("ada-")
    assert chart["chartName"] == "Sales"


@pytest.mark.asyncio
async def test_storage_failure_returns_generic_server_error(settings):
    app = create_app(settings, UnreachableStore())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        ada = await register(client, "Ada", "ada@mail.com")

        response = await client.get("/api/posts", headers=ada)

    assert response.status_code == 500
    assert response.json() == {"msg": "Server Error"}


@pytest.mark.asyncio
async def test_entry_update_rejects_null_for_required_fields(client):
    ada = await register(client, "Ada", "ada@mail.com")
    await client.post("/profile", json={"status": "Developer", "skills": "python"}, headers=ada)
    profile = (await client.put(
        "/profile/experience",
        json={"title": "Dev", "company": "Acme", "from": "2020-01-01"},
        headers=ada,
    )).json()["data"]
    exp_id = profile["experience"][0]["id"]

    response = await client.put(f"/profile/experience/{exp_id}", json={"title": None}, headers=ada)
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["title"]

    response = await client.put(f"/profile/experience/{exp_id}", json={"description": None}, headers=ada)
    assert response.status_code == 200
    assert response.json()["data"]["experience"][0]["title"] == "Dev"


@pytest.mark.asyncio
async def test_chart_id_falls_back_to_caller_id(client):
    ada = await register(client, "Ada", "ada@mail.com")
    user_id = (await client.get("/api/auth", headers=ada)).json()["data"]["id"]

    response = await client.post("/api/chart", json={"chartName": "Sales"}, headers=ada)

    assert response.status_code == 200
    chart = response.json()["data"]
    assert chart["chartId"].startswith(f"{user_id}-")
    assert chart["createdBy"] == user_id
