"""Integration tests for the documents routes."""

import pytest

from tests.helpers import EDUCATION, EXPERIENCE, master_document_id


@pytest.mark.integration
async def test_master_document_exists_after_registration(client, auth1):
    response = await client.get("/users/user1/documents", headers=auth1)

    documents = response.json()["documents"]
    assert len(documents) == 1
    assert documents[0]["documentName"] == "Master Resume"
    assert documents[0]["isMaster"] is True
    assert documents[0]["owner"] == "user1"


@pytest.mark.integration
async def test_create_get_update_delete(client, auth1):
    created = await client.post(
        "/users/user1/documents", json={"documentName": "Backend roles"}, headers=auth1
    )
    assert created.status_code == 201
    document = created.json()["document"]
    assert document["isMaster"] is False
    url = f"/users/user1/documents/{document['id']}"

    fetched = await client.get(url, headers=auth1)
    assert fetched.status_code == 200
    content = fetched.json()["document"]
    assert content["sections"] == content["educations"] == content["experiences"] == []

    updated = await client.patch(
        url, json={"documentName": "Platform roles", "isLocked": True}, headers=auth1
    )
    assert updated.status_code == 200
    assert updated.json()["document"]["documentName"] == "Platform roles"
    assert updated.json()["document"]["isLocked"] is True

    deleted = await client.delete(url, headers=auth1)
    assert deleted.status_code == 204
    assert (await client.get(url, headers=auth1)).status_code == 404
    assert (await client.delete(url, headers=auth1)).status_code == 204


@pytest.mark.integration
async def test_duplicate_document_name(client, auth1):
    response = await client.post(
        "/users/user1/documents", json={"documentName": "Master Resume"}, headers=auth1
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == 'Document with name "Master Resume" already exists.'


@pytest.mark.integration
async def test_master_document_rules(client, auth1):
    master_id = await master_document_id(client, "user1", auth1)
    url = f"/users/user1/documents/{master_id}"

    rejected = await client.patch(url, json={"documentName": "x", "isTemplate": True}, headers=auth1)
    assert rejected.status_code == 400
    assert rejected.json()["error"]["message"] == (
        "Only document name can be updated for primary resume templates."
    )

    renamed = await client.patch(url, json={"documentName": "Everything"}, headers=auth1)
    assert renamed.status_code == 200
    assert renamed.json()["document"]["isTemplate"] is False

    deleted = await client.delete(url, headers=auth1)
    assert deleted.status_code == 403
    assert deleted.json()["error"]["message"] == "Can not delete primary resume template."


@pytest.mark.integration
@pytest.mark.parametrize(
    "body", [{"owner": "user2"}, {"isMaster": False}, {"documentName": None}, {"documentName": " "}]
)
async def test_update_rejects_bad_bodies(client, auth1, body):
    master_id = await master_document_id(client, "user1", auth1)
    response = await client.patch(f"/users/user1/documents/{master_id}", json=body, headers=auth1)
    assert response.status_code == 400


@pytest.mark.integration
async def test_document_content_in_order(client, auth1):
    master_id = await master_document_id(client, "user1", auth1)
    base = f"/users/user1/documents/{master_id}"

    education = await client.post(f"{base}/educations", json=EDUCATION, headers=auth1)
    experience = await client.post(f"{base}/experiences", json=EXPERIENCE, headers=auth1)
    experience_id = experience.json()["experience"]["id"]
    await client.post(
        f"{base}/experiences/{experience_id}/text-snippets",
        json={"type": "bullet", "content": "Shipped it"},
        headers=auth1,
    )
    sections = (await client.get("/sections")).json()["sections"]
    for section in sections:
        await client.post(f"{base}/sections/{section['id']}", headers=auth1)

    content = (await client.get(base, headers=auth1)).json()["document"]

    assert [s["id"] for s in content["sections"]] == [s["id"] for s in sections]
    assert [e["id"] for e in content["educations"]] == [education.json()["education"]["id"]]
    assert [e["id"] for e in content["experiences"]] == [experience_id]
    assert [s["content"] for s in content["experiences"][0]["textSnippets"]] == ["Shipped it"]


@pytest.mark.integration
async def test_other_users_document_is_forbidden(client, auth1, auth2):
    master_id = await master_document_id(client, "user1", auth1)
    response = await client.get(f"/users/user2/documents/{master_id}", headers=auth2)
    assert response.status_code == 403


@pytest.mark.integration
async def test_unknown_path(client):
    response = await client.get("/no/such/path")
    assert response.status_code == 404
    assert response.json() == {"error": {"message": "URL path not found.", "status": 404}}


@pytest.mark.integration
async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
