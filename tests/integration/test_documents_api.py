import uuid

import pytest

from jotter.core.security import create_access_token
from tests.factories import bearer_headers, doc, heading


@pytest.fixture
def auth():
    return bearer_headers("owner-sub", email="owner@example.com", name="Olga Owner")


@pytest.fixture
def other_auth():
    return bearer_headers("someone-else", email="else@example.com")


async def _create(client, auth, title="Draft", content=None):
    response = await client.post(
        "/documents", json={"title": title, "content": content or doc("Hello world")}, headers=auth
    )
    assert response.status_code == 201
    return response.json()


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_requires_bearer_token(client):
    response = await client.get("/documents")
    assert response.status_code == 401
    assert response.json()["success"] is False

    response = await client.get("/documents", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_malformed_profile_claims_are_rejected(client):
    token = create_access_token({"sub": "odd-claims", "email": 123, "name": ["x"]})
    response = await client.get("/documents", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_document_crud(client, auth):
    created = await _create(client, auth)
    assert created["status"] == "draft"
    assert created["excerpt"] == "Hello world"
    assert created["word_count"] == 2

    response = await client.patch(
        f"/documents/{created['uuid']}", json={"title": "  Renamed  "}, headers=auth
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["content"] == doc("Hello world")

    response = await client.get("/documents", headers=auth)
    body = response.json()
    assert body["total"] == 1
    assert body["documents"][0]["uuid"] == created["uuid"]

    response = await client.delete(f"/documents/{created['uuid']}", headers=auth)
    assert response.status_code == 204

    response = await client.get(f"/documents/{created['uuid']}", headers=auth)
    assert response.status_code == 404
    assert response.json()["message"] == "Document not found"


async def test_list_is_scoped_to_caller(client, auth, other_auth):
    await _create(client, auth)
    response = await client.get("/documents", headers=other_auth)
    assert response.json()["total"] == 0


async def test_foreign_document_is_not_found(client, auth, other_auth):
    created = await _create(client, auth)

    for method, path in [
        ("GET", f"/documents/{created['uuid']}"),
        ("DELETE", f"/documents/{created['uuid']}"),
        ("POST", f"/documents/{created['uuid']}/publish"),
        ("GET", f"/documents/{created['uuid']}/versions"),
    ]:
        response = await client.request(method, path, headers=other_auth)
        assert response.status_code == 404, path


async def test_malformed_uuid_is_rejected(client, auth):
    response = await client.get("/documents/not-a-uuid", headers=auth)
    assert response.status_code == 400
    assert response.json()["code"] == 400


async def test_publish_restore_flow(client, auth):
    created = await _create(client, auth)
    doc_url = f"/documents/{created['uuid']}"

    response = await client.post(f"{doc_url}/publish", headers=auth)
    assert response.status_code == 200
    assert response.json()["status"] == "published"
    assert response.json()["published_at"] is not None

    await client.patch(doc_url, json={"content": doc("Hello there world")}, headers=auth)
    await client.post(f"{doc_url}/publish", headers=auth)

    versions = (await client.get(f"{doc_url}/versions", headers=auth)).json()
    assert [v["version_number"] for v in versions] == [2, 1]
    assert versions[0]["created_by_name"] == "Olga Owner"
    v1 = versions[1]

    response = await client.get(f"{doc_url}/versions/{v1['uuid']}/compare", headers=auth)
    compare = response.json()
    assert compare["summary"] == {"unchanged": 2, "added": 1, "removed": 0}
    assert [s["type"] for s in compare["segments"]] == ["unchanged", "added", "unchanged"]

    response = await client.post(f"{doc_url}/versions/{v1['uuid']}/restore", headers=auth)
    assert response.status_code == 200
    assert response.json()["content"] == doc("Hello world")

    versions = (await client.get(f"{doc_url}/versions", headers=auth)).json()
    assert [v["version_number"] for v in versions] == [3, 2, 1]


async def test_unpublish_draft_is_bad_request(client, auth):
    created = await _create(client, auth)
    response = await client.post(f"/documents/{created['uuid']}/unpublish", headers=auth)
    assert response.status_code == 400
    assert response.json()["message"] == "Document is not published"


async def test_annotate_version(client, auth):
    created = await _create(client, auth)
    doc_url = f"/documents/{created['uuid']}"
    await client.post(f"{doc_url}/publish", headers=auth)
    version = (await client.get(f"{doc_url}/versions", headers=auth)).json()[0]

    response = await client.patch(
        f"{doc_url}/versions/{version['uuid']}", json={"annotation": "before review"}, headers=auth
    )
    assert response.status_code == 200
    assert response.json()["annotation"] == "before review"

    response = await client.patch(
        f"{doc_url}/versions/{version['uuid']}", json={"annotation": "x" * 501}, headers=auth
    )
    assert response.status_code == 400

    response = await client.patch(
        f"{doc_url}/versions/{uuid.uuid4()}", json={"annotation": "missing"}, headers=auth
    )
    assert response.status_code == 404


async def test_annotation_limit_applies_after_trimming(client, auth):
    created = await _create(client, auth)
    doc_url = f"/documents/{created['uuid']}"
    await client.post(f"{doc_url}/publish", headers=auth)
    version = (await client.get(f"{doc_url}/versions", headers=auth)).json()[0]
    url = f"{doc_url}/versions/{version['uuid']}"

    response = await client.patch(url, json={"annotation": "  " + "a" * 500 + "  "}, headers=auth)
    assert response.status_code == 200
    assert response.json()["annotation"] == "a" * 500

    response = await client.patch(url, json={"annotation": " " + "a" * 501}, headers=auth)
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "annotation"}

    response = await client.patch(url, json={"annotation": "   "}, headers=auth)
    assert response.status_code == 200
    assert response.json()["annotation"] is None


async def test_preview_profiles(client, auth):
    content = doc(heading("A heading that is rather long for a small thumbnail card"), "Body")
    created = await _create(client, auth, content=content)
    url = f"/documents/{created['uuid']}/preview"

    hover = (await client.get(url, headers=auth)).json()
    assert hover["profile"] == "hover"
    assert [e["type"] for e in hover["elements"]] == ["heading", "paragraph"]

    thumb = (await client.get(url, params={"profile": "thumbnail", "max_elements": 1}, headers=auth)).json()
    assert len(thumb["elements"]) == 1
    assert len(thumb["elements"][0]["text"]) == 40

    response = await client.get(url, params={"profile": "poster"}, headers=auth)
    assert response.status_code == 400
