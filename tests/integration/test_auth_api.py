"""Integration tests for registration, sign-in and the users routes."""

import pytest

from tests.helpers import PASSWORD, register


@pytest.mark.integration
async def test_register_returns_token(client):
    response = await client.post("/auth/register", json={"username": "user1", "password": PASSWORD})

    assert response.status_code == 201
    assert response.json()["authToken"]


@pytest.mark.integration
async def test_register_taken_username(client, auth1):
    response = await client.post(
        "/auth/register", json={"username": "user1", "password": "Other123!"}
    )

    assert response.status_code == 409
    assert response.json() == {
        "error": {"message": 'Username "user1" is not available.', "status": 409}
    }

    signin = await client.post("/auth/signin", json={"username": "user1", "password": PASSWORD})
    assert signin.status_code == 200


@pytest.mark.integration
@pytest.mark.parametrize(
    "body",
    [
        {"username": "us", "password": PASSWORD},
        {"username": "user1", "password": "password"},
        {"username": "user1"},
        {"username": "user1", "password": PASSWORD, "isAdmin": True},
    ],
)
async def test_register_validation(client, body):
    response = await client.post("/auth/register", json=body)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["status"] == 400
    assert isinstance(error["message"], list) and error["message"]


@pytest.mark.integration
async def test_signin(client, auth1):
    response = await client.post("/auth/signin", json={"username": "user1", "password": PASSWORD})
    assert response.status_code == 200

    token = response.json()["authToken"]
    documents = await client.get(
        "/users/user1/documents", headers={"Authorization": f"Bearer {token}"}
    )
    assert documents.status_code == 200


@pytest.mark.integration
async def test_signin_wrong_password(client, auth1):
    response = await client.post(
        "/auth/signin", json={"username": "user1", "password": "Wrong123!"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid username/password."


@pytest.mark.integration
async def test_change_password(client, auth1):
    response = await client.patch(
        "/users/user1",
        json={"oldPassword": PASSWORD, "newPassword": "Newpass1!"},
        headers=auth1,
    )
    assert response.status_code == 200
    assert response.json() == {"user": {"username": "user1"}}

    old = await client.post("/auth/signin", json={"username": "user1", "password": PASSWORD})
    new = await client.post("/auth/signin", json={"username": "user1", "password": "Newpass1!"})
    assert (old.status_code, new.status_code) == (401, 200)


@pytest.mark.integration
async def test_change_password_needs_old_password(client, auth1):
    response = await client.patch("/users/user1", json={"newPassword": "Newpass1!"}, headers=auth1)
    assert response.status_code == 400


@pytest.mark.integration
async def test_delete_user(client, auth1):
    response = await client.delete("/users/user1", headers=auth1)
    assert response.status_code == 204

    signin = await client.post("/auth/signin", json={"username": "user1", "password": PASSWORD})
    assert signin.status_code == 401

    again = await register(client, "user1")
    assert again


@pytest.mark.integration
async def test_contact_info(client, auth1):
    empty = await client.get("/users/user1/contact-info", headers=auth1)
    assert empty.status_code == 200
    assert empty.json() == {"contactInfo": None}

    saved = await client.put(
        "/users/user1/contact-info",
        json={"fullName": "User One", "email": "one@example.com"},
        headers=auth1,
    )
    assert saved.status_code == 200
    assert saved.json()["contactInfo"]["fullName"] == "User One"

    fetched = await client.get("/users/user1/contact-info", headers=auth1)
    assert fetched.json()["contactInfo"]["email"] == "one@example.com"


@pytest.mark.integration
async def test_missing_or_bad_token(client, auth1):
    missing = await client.get("/users/user1/documents")
    bad = await client.get(
        "/users/user1/documents", headers={"Authorization": "Bearer not-a-token"}
    )
    assert (missing.status_code, bad.status_code) == (401, 401)


@pytest.mark.integration
async def test_other_users_path_is_forbidden(client, auth1, auth2):
    response = await client.get("/users/user2/documents", headers=auth1)
    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Cannot access other users' resources."


@pytest.mark.integration
async def test_contact_info_of_other_user_is_forbidden(client, auth1, auth2):
    await client.put("/users/user1/contact-info", json={"fullName": "User One"}, headers=auth1)

    read = await client.get("/users/user1/contact-info", headers=auth2)
    write = await client.put(
        "/users/user1/contact-info", json={"fullName": "Someone Else"}, headers=auth2
    )
    assert (read.status_code, write.status_code) == (403, 403)

    own = await client.get("/users/user1/contact-info", headers=auth1)
    assert own.json()["contactInfo"]["fullName"] == "User One"
