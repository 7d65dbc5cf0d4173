# tests/test_comments.py
import pytest

from conftest import bearer, notifications, upload_video


def _comment(client, token, video_id, content="hola", parent_id=None):
    payload = {"content": content, "videoId": video_id}
    if parent_id is not None:
        payload["parentId"] = parent_id
    return client.post("/api/comments", json=payload, headers=bearer(token))


@pytest.fixture
def video(client, alice):
    return upload_video(client, alice[1], title="Receta")


def test_create_and_nested_thread(client, alice, bob, video):
    _, alice_token = alice
    bob_id, bob_token = bob

    root = _comment(client, bob_token, video["id"], "¿qué horno usás?")
    assert root.status_code == 201
    root = root.json()
    assert root["username"] == "bob"
    assert root["author"]["id"] == bob_id
    assert root["parentId"] is None

    reply = _comment(client, alice_token, video["id"], "uno a gas", parent_id=root["id"]).json()
    deep = _comment(client, bob_token, video["id"], "gracias", parent_id=reply["id"]).json()
    other_root = _comment(client, alice_token, video["id"], "segunda raíz").json()

    tree = client.get(f"/api/comments/video/{video['id']}").json()
    assert [n["id"] for n in tree] == [root["id"], other_root["id"]]
    assert [r["id"] for r in tree[0]["replies"]] == [reply["id"]]
    assert [r["id"] for r in tree[0]["replies"][0]["replies"]] == [deep["id"]]
    assert tree[0]["replies"][0]["replies"][0]["replies"] == []


def test_comment_on_missing_video(client, alice):
    res = _comment(client, alice[1], 9999)
    assert res.status_code == 404
    assert res.json() == {"message": "Video not found"}


def test_parent_must_belong_to_same_video(client, alice, video):
    _, token = alice
    other = upload_video(client, token, title="Otro")
    parent = _comment(client, token, other["id"]).json()

    res = _comment(client, token, video["id"], "respuesta", parent_id=parent["id"])
    assert res.status_code == 400

    res = _comment(client, token, video["id"], "respuesta", parent_id=9999)
    assert res.status_code == 400


def test_blank_content_is_rejected(client, alice, video):
    res = _comment(client, alice[1], video["id"], "   ")
    assert res.status_code == 400


def test_owner_only_update_and_delete(client, alice, bob, video):
    _, alice_token = alice
    _, bob_token = bob
    c = _comment(client, bob_token, video["id"], "original").json()
    url = f"/api/comments/{c['id']}"

    res = client.put(url, json={"content": "editado"}, headers=bearer(alice_token))
    assert res.status_code == 403
    assert res.json() == {"message": "Not authorized"}
    assert client.delete(url, headers=bearer(alice_token)).status_code == 403

    res = client.put(url, json={"content": "editado"}, headers=bearer(bob_token))
    assert res.status_code == 200
    assert res.json()["content"] == "editado"

    res = client.delete(url, headers=bearer(bob_token))
    assert res.json() == {"message": "Comment deleted successfully"}
    assert client.get(url).status_code == 404


def test_deleted_parent_hides_its_replies(client, alice, bob, video):
    _, alice_token = alice
    _, bob_token = bob
    parent = _comment(client, bob_token, video["id"], "padre").json()
    _comment(client, alice_token, video["id"], "hija", parent_id=parent["id"])

    client.delete(f"/api/comments/{parent['id']}", headers=bearer(bob_token))

    assert client.get(f"/api/comments/video/{video['id']}").json() == []
    # la respuesta sigue guardada, solo no aparece en el árbol
    assert client.get("/api/comments", params={"videoId": video["id"]}).json()["total"] == 1


def test_comment_notifies_video_owner_but_not_self(client, alice, bob, video):
    _, alice_token = alice
    _, bob_token = bob

    _comment(client, alice_token, video["id"], "mi propio comentario")
    assert notifications(client, alice_token) == []

    _comment(client, bob_token, video["id"], "buenísimo")
    inbox = notifications(client, alice_token)
    assert len(inbox) == 1
    assert inbox[0]["message"] == 'bob commented on your video "Receta"'
    assert inbox[0]["link"] == f"/watch/{video['id']}"


def test_paged_listing(client, alice, bob, video):
    alice_id, alice_token = alice
    _, bob_token = bob
    for i in range(5):
        _comment(client, alice_token, video["id"], f"a{i}")
    _comment(client, bob_token, video["id"], "de bob")

    page = client.get(
        "/api/comments", params={"videoId": video["id"], "page": 2, "limit": 4}
    ).json()
    assert page["total"] == 6
    assert page["page"] == 2
    assert page["pages"] == 2
    assert len(page["comments"]) == 2

    mine = client.get("/api/comments", params={"userId": alice_id}).json()
    assert mine["total"] == 5
    # más nuevos primero
    assert mine["comments"][0]["content"] == "a4"


def test_username_snapshot_survives_rename(client, alice, bob, video):
    _, bob_token = bob
    bob_id = bob[0]
    c = _comment(client, bob_token, video["id"]).json()

    client.put(f"/api/users/{bob_id}", data={"username": "roberto"}, headers=bearer(bob_token))

    got = client.get(f"/api/comments/{c['id']}").json()
    assert got["username"] == "bob"
    assert got["author"]["username"] == "roberto"
