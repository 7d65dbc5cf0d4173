# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from streamhub.core.config import Settings
from streamhub.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SECRET_KEY="test-secret",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        MEDIA_DIR=str(tmp_path / "media"),
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    # `with` dispara el lifespan: crea el pool y las tablas
    with TestClient(app) as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, username: str, channel_name: str | None = None, password: str = "secret123"):
    data = {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
    }
    if channel_name:
        data["channelName"] = channel_name
    res = client.post("/api/auth/signup", data=data)
    assert res.status_code == 200, res.text
    body = res.json()
    return body["user"]["id"], body["token"]


def upload_video(client, token: str, title: str = "Mi video", **fields):
    data = {
        "title": title,
        "description": fields.pop("description", "una descripción"),
        "duration": str(fields.pop("duration", 42)),
    }
    data.update(fields)
    res = client.post(
        "/api/videos",
        data=data,
        files={"video": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        headers=bearer(token),
    )
    assert res.status_code == 201, res.text
    return res.json()


def notifications(client, token: str) -> list:
    res = client.get("/api/users/me/notifications", headers=bearer(token))
    assert res.status_code == 200, res.text
    return res.json()


@pytest.fixture
def alice(client):
    return signup(client, "alice", channel_name="Alice Cooks")


@pytest.fixture
def bob(client):
    return signup(client, "bob", channel_name="Bob Builds")
