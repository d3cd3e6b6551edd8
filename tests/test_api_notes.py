"""
Noteful API — Notes Endpoint Tests
==================================

What:  /api/notes end to end: authentication, CRUD, filters, and the
       folder/tag ownership rules.
How:   Real app + temporary SQLite database through the test_client fixture.
"""

from uuid import uuid4

import pytest


async def create(client, headers, path, **body):
    response = await client.post(path, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/api/notes"),
            ("GET", f"/api/notes/{uuid4()}"),
            ("POST", "/api/notes"),
            ("PUT", f"/api/notes/{uuid4()}"),
            ("DELETE", f"/api/notes/{uuid4()}"),
        ],
    )
    async def test_requires_token(self, test_client, method, path):
        response = await test_client.request(method, path, json={"title": "t"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_rejects_bad_token(self, test_client):
        response = await test_client.get(
            "/api/notes", headers={"Authorization": "Bearer not.a.jwt"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestCreateNote:
    @pytest.mark.asyncio
    async def test_create_minimal(self, test_client, auth_headers):
        response = await test_client.post(
            "/api/notes", json={"title": "Groceries"}, headers=auth_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Groceries"
        assert body["content"] is None
        assert body["folderId"] is None
        assert body["tags"] == []
        assert response.headers["Location"] == f"/api/notes/{body['id']}"

    @pytest.mark.asyncio
    async def test_create_with_folder_and_tags(self, test_client, auth_headers):
        folder = await create(test_client, auth_headers, "/api/folders", name="Home")
        tag_a = await create(test_client, auth_headers, "/api/tags", name="urgent")
        tag_b = await create(test_client, auth_headers, "/api/tags", name="errands")

        note = await create(
            test_client,
            auth_headers,
            "/api/notes",
            title="Groceries",
            content="eggs, milk",
            folderId=folder["id"],
            tags=[tag_a["id"], tag_b["id"]],
        )

        assert note["folderId"] == folder["id"]
        assert [tag["name"] for tag in note["tags"]] == ["errands", "urgent"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, message",
        [
            ({"content": "no title"}, "Missing `title` in request body"),
            ({"title": 123}, "Incorrect field type: title must be string"),
            ({"title": ["x"]}, "Incorrect field type: title must be string"),
            ({"title": "t", "content": 5}, "Incorrect field type: content must be string"),
            ({"title": "t", "folderId": "123"}, "The `folderId` is not valid"),
            ({"title": "t", "tags": "abc"}, "The tags property must be an array"),
            ({"title": "t", "tags": ["abc"]}, "The tags `id` is not valid"),
            ({"title": "t", "folderId": str(uuid4())}, "The folder is not valid"),
            ({"title": "t", "tags": [str(uuid4())]}, "The tag is not valid"),
        ],
    )
    async def test_invalid_body(self, test_client, auth_headers, body, message):
        response = await test_client.post("/api/notes", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == message

    @pytest.mark.asyncio
    async def test_long_values_accepted(self, test_client, auth_headers):
        folder = await create(test_client, auth_headers, "/api/folders", name="f" * 300)
        tag = await create(test_client, auth_headers, "/api/tags", name="t" * 300)

        note = await create(
            test_client,
            auth_headers,
            "/api/notes",
            title="x" * 1000,
            folderId=folder["id"],
            tags=[tag["id"]],
        )

        assert note["title"] == "x" * 1000
        assert note["tags"][0]["name"] == "t" * 300

    @pytest.mark.asyncio
    async def test_foreign_folder_rejected(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        bobs_folder = await create(test_client, bob, "/api/folders", name="Bob's")

        response = await test_client.post(
            "/api/notes", json={"title": "t", "folderId": bobs_folder["id"]}, headers=alice
        )

        assert response.status_code == 400
        assert response.json()["message"] == "The folder is not valid"

    @pytest.mark.asyncio
    async def test_foreign_tag_rejected(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        alices_tag = await create(test_client, alice, "/api/tags", name="mine")
        bobs_tag = await create(test_client, bob, "/api/tags", name="theirs")

        response = await test_client.post(
            "/api/notes",
            json={"title": "t", "tags": [alices_tag["id"], bobs_tag["id"]]},
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "The tag is not valid"

    @pytest.mark.asyncio
    async def test_rejected_note_not_stored(self, test_client, auth_headers):
        await test_client.post(
            "/api/notes", json={"title": "t", "folderId": str(uuid4())}, headers=auth_headers
        )

        response = await test_client.get("/api/notes", headers=auth_headers)

        assert response.json() == []


class TestReadNotes:
    @pytest.mark.asyncio
    async def test_get_note(self, test_client, auth_headers):
        note = await create(test_client, auth_headers, "/api/notes", title="Groceries")

        response = await test_client.get(f"/api/notes/{note['id']}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == note["id"]
        assert body["title"] == "Groceries"
        assert body["userId"] == note["userId"]

    @pytest.mark.asyncio
    async def test_invalid_id(self, test_client, auth_headers):
        response = await test_client.get("/api/notes/12345", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"

    @pytest.mark.asyncio
    async def test_missing_note(self, test_client, auth_headers):
        response = await test_client.get(f"/api/notes/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_foreign_note_is_not_found(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        note = await create(test_client, alice, "/api/notes", title="private")

        response = await test_client.get(f"/api/notes/{note['id']}", headers=bob)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_owner(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        await create(test_client, alice, "/api/notes", title="alice's")
        await create(test_client, bob, "/api/notes", title="bob's")

        response = await test_client.get("/api/notes", headers=alice)

        assert [note["title"] for note in response.json()] == ["alice's"]

    @pytest.mark.asyncio
    async def test_list_most_recently_updated_first(self, test_client, auth_headers):
        first = await create(test_client, auth_headers, "/api/notes", title="first")
        await create(test_client, auth_headers, "/api/notes", title="second")
        await test_client.put(
            f"/api/notes/{first['id']}", json={"content": "touched"}, headers=auth_headers
        )

        response = await test_client.get("/api/notes", headers=auth_headers)

        assert [note["title"] for note in response.json()] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_search_term(self, test_client, auth_headers):
        await create(test_client, auth_headers, "/api/notes", title="Cats", content="meow")
        await create(test_client, auth_headers, "/api/notes", title="Dogs", content="woof")
        await create(test_client, auth_headers, "/api/notes", title="Birds", content="100% tweet")

        by_title = await test_client.get("/api/notes?searchTerm=cAt", headers=auth_headers)
        by_content = await test_client.get("/api/notes?searchTerm=WOOF", headers=auth_headers)
        literal = await test_client.get("/api/notes?searchTerm=%25", headers=auth_headers)

        assert [note["title"] for note in by_title.json()] == ["Cats"]
        assert [note["title"] for note in by_content.json()] == ["Dogs"]
        assert [note["title"] for note in literal.json()] == ["Birds"]

    @pytest.mark.asyncio
    async def test_filter_by_folder_and_tag(self, test_client, auth_headers):
        folder = await create(test_client, auth_headers, "/api/folders", name="Work")
        tag = await create(test_client, auth_headers, "/api/tags", name="todo")
        await create(test_client, auth_headers, "/api/notes", title="in folder", folderId=folder["id"])
        await create(test_client, auth_headers, "/api/notes", title="tagged", tags=[tag["id"]])
        await create(test_client, auth_headers, "/api/notes", title="plain")

        in_folder = await test_client.get(
            "/api/notes", params={"folderId": folder["id"]}, headers=auth_headers
        )
        tagged = await test_client.get(
            "/api/notes", params={"tagId": tag["id"]}, headers=auth_headers
        )

        assert [note["title"] for note in in_folder.json()] == ["in folder"]
        assert [note["title"] for note in tagged.json()] == ["tagged"]

    @pytest.mark.asyncio
    async def test_invalid_filter(self, test_client, auth_headers):
        response = await test_client.get("/api/notes?folderId=abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "The `folderId` is not valid"


class TestUpdateNote:
    @pytest.mark.asyncio
    async def test_partial_update(self, test_client, auth_headers):
        folder = await create(test_client, auth_headers, "/api/folders", name="Home")
        note = await create(
            test_client, auth_headers, "/api/notes", title="Groceries", folderId=folder["id"]
        )

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"content": "eggs"}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Groceries"
        assert body["content"] == "eggs"
        assert body["folderId"] == folder["id"]

    @pytest.mark.asyncio
    async def test_replace_tags_and_detach_folder(self, test_client, auth_headers):
        folder = await create(test_client, auth_headers, "/api/folders", name="Home")
        old_tag = await create(test_client, auth_headers, "/api/tags", name="old")
        new_tag = await create(test_client, auth_headers, "/api/tags", name="new")
        note = await create(
            test_client,
            auth_headers,
            "/api/notes",
            title="t",
            folderId=folder["id"],
            tags=[old_tag["id"]],
        )

        response = await test_client.put(
            f"/api/notes/{note['id']}",
            json={"folderId": None, "tags": [new_tag["id"]]},
            headers=auth_headers,
        )

        body = response.json()
        assert body["folderId"] is None
        assert [tag["id"] for tag in body["tags"]] == [new_tag["id"]]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, message",
        [
            ({"title": ""}, "Missing `title` in request body"),
            ({"title": 42}, "Incorrect field type: title must be string"),
            ({"content": ["x"]}, "Incorrect field type: content must be string"),
            ({"folderId": "abc"}, "The `folderId` is not valid"),
            ({"tags": "abc"}, "The tags property must be an array"),
            ({"tags": ["abc"]}, "The tags `id` is not valid"),
            ({"folderId": str(uuid4())}, "The folder is not valid"),
            ({"tags": [str(uuid4())]}, "The tag is not valid"),
        ],
    )
    async def test_invalid_update(self, test_client, auth_headers, body, message):
        note = await create(test_client, auth_headers, "/api/notes", title="t")

        response = await test_client.put(
            f"/api/notes/{note['id']}", json=body, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == message

    @pytest.mark.asyncio
    async def test_update_foreign_note(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        note = await create(test_client, alice, "/api/notes", title="alice's")

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "hijacked"}, headers=bob
        )
        unchanged = await test_client.get(f"/api/notes/{note['id']}", headers=alice)

        assert response.status_code == 404
        assert unchanged.json()["title"] == "alice's"

    @pytest.mark.asyncio
    async def test_update_invalid_id(self, test_client, auth_headers):
        response = await test_client.put(
            "/api/notes/xyz", json={"title": "t"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is not valid"


class TestDeleteNote:
    @pytest.mark.asyncio
    async def test_delete(self, test_client, auth_headers):
        tag = await create(test_client, auth_headers, "/api/tags", name="t")
        note = await create(test_client, auth_headers, "/api/notes", title="t", tags=[tag["id"]])

        response = await test_client.delete(f"/api/notes/{note['id']}", headers=auth_headers)
        again = await test_client.get(f"/api/notes/{note['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_foreign_note(self, test_client, make_user):
        _, alice = await make_user("alice")
        _, bob = await make_user("bob")
        note = await create(test_client, alice, "/api/notes", title="alice's")

        response = await test_client.delete(f"/api/notes/{note['id']}", headers=bob)
        still_there = await test_client.get(f"/api/notes/{note['id']}", headers=alice)

        assert response.status_code == 404
        assert still_there.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_invalid_id(self, test_client, auth_headers):
        response = await test_client.delete("/api/notes/xyz", headers=auth_headers)

        assert response.status_code == 400
