# tests/test_auth.py
import os

from jose import jwt

from conftest import bearer, signup


def test_signup_returns_user_and_token(client):
    res = client.post(
        "/api/auth/signup",
        data={
            "username": "carol",
            "email": "Carol@Example.COM",
            "password": "secret123",
            "channelName": "Carol TV",
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["token"]
    user = body["user"]
    assert user["username"] == "carol"
    assert user["email"] == "carol@example.com"
    assert user["channelName"] == "Carol TV"
    assert user["profilePicture"].startswith("https://placehold.co/")
    assert "password" not in user
    assert "hashedPassword" not in user


def test_signup_with_avatar_stores_reference(client, settings):
    res = client.post(
        "/api/auth/signup",
        data={"username": "dave", "email": "dave@example.com", "password": "secret123"},
        files={"profilePicture": ("me.png", b"\x89PNG\r\n", "image/png")},
    )
    assert res.status_code == 200
    pic = res.json()["user"]["profilePicture"]
    assert pic.startswith("/media/avatars/")
    assert client.get(pic).status_code == 200


def test_signup_rejects_duplicates_and_bad_input(client, alice):
    dup = client.post(
        "/api/auth/signup",
        data={"username": "alice", "email": "other@example.com", "password": "secret123"},
    )
    assert dup.status_code == 400
    assert dup.json() == {"message": "Username already exists"}

    dup_email = client.post(
        "/api/auth/signup",
        data={"username": "alice2", "email": "ALICE@example.com", "password": "secret123"},
    )
    assert dup_email.status_code == 400

    short = client.post(
        "/api/auth/signup",
        data={"username": "eve", "email": "eve@example.com", "password": "123"},
    )
    assert short.status_code == 400
    assert "message" in short.json()

    missing = client.post("/api/auth/signup", data={"username": "eve"})
    assert missing.status_code == 400


def test_signin(client, alice):
    ok = client.post("/api/auth/signin", json={"email": "alice@example.com", "password": "secret123"})
    assert ok.status_code == 200
    body = ok.json()
    assert body["user"]["id"] == alice[0]
    assert body["token"]

    me = client.get("/api/users/me", headers=bearer(body["token"]))
    assert me.status_code == 200
    assert me.json()["username"] == "alice"

    bad = client.post("/api/auth/signin", json={"email": "alice@example.com", "password": "nope-nope"})
    assert bad.status_code == 400
    assert bad.json() == {"message": "Invalid credentials"}

    unknown = client.post("/api/auth/signin", json={"email": "ghost@example.com", "password": "secret123"})
    assert unknown.status_code == 400


def test_gate_rejects_missing_and_garbage_tokens(client):
    res = client.get("/api/users/me")
    assert res.status_code == 401
    assert res.json() == {"message": "No token provided"}

    res = client.get("/api/users/me", headers={"Authorization": "Basic abc"})
    assert res.status_code == 401
    assert res.json() == {"message": "No token provided"}

    res = client.get("/api/users/me", headers=bearer("garbage"))
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid token"}


def test_gate_rejects_wrong_signature_and_expired(client, settings, alice):
    forged = jwt.encode({"sub": str(alice[0])}, "another-secret", algorithm="HS256")
    assert client.get("/api/users/me", headers=bearer(forged)).status_code == 401

    expired = jwt.encode(
        {"sub": str(alice[0]), "exp": 1}, settings.SECRET_KEY, algorithm="HS256"
    )
    res = client.get("/api/users/me", headers=bearer(expired))
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid token"}


def test_garbage_token_has_no_side_effects(client, alice):
    _, token = alice
    video = client.post(
        "/api/videos",
        data={"title": "x", "description": "y", "duration": "1"},
        files={"video": ("v.mp4", b"data", "video/mp4")},
        headers=bearer("garbage"),
    )
    assert video.status_code == 401
    assert client.get("/api/videos").json() == []

    comment = client.post(
        "/api/comments",
        json={"content": "hola", "videoId": 1},
        headers=bearer("garbage"),
    )
    assert comment.status_code == 401
    assert client.get("/api/comments").json()["total"] == 0


def test_token_for_deleted_account_gets_404(client):
    uid, token = signup(client, "temp")
    assert client.delete(f"/api/users/{uid}", headers=bearer(token)).status_code == 200
    res = client.get("/api/users/me", headers=bearer(token))
    assert res.status_code == 404
    assert res.json() == {"message": "User not found"}


def test_rejected_signup_does_not_keep_its_avatar(client, settings, alice):
    res = client.post(
        "/api/auth/signup",
        data={"username": "alice", "email": "otra@example.com", "password": "secret123"},
        files={"profilePicture": ("me.png", b"\x89PNG\r\n", "image/png")},
    )
    assert res.status_code == 400
    assert os.listdir(os.path.join(settings.MEDIA_DIR, "avatars")) == []
