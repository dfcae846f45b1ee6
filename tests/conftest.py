"""Shared fixtures: a temporary launcher workspace and an app built on it."""

import json

import pytest
from fastapi.testclient import TestClient

from launcher_api.core.config import Settings
from launcher_api.factory import create_app

NEWS = [
    {"id": 1, "title": "Season 2", "content": "New maps and skins.", "image": "season2.jpg", "date": "2024-03-01"},
    {"id": 2, "title": "Патч 1.0.3", "content": "Исправления ошибок", "image": "patch.jpg", "date": "2024-03-15"},
    {"id": 3, "title": "Maintenance", "content": "", "image": "", "date": "2024-04-02"},
]

LAUNCHER_BYTES = b"MZ" + bytes(range(256)) * 300
GAME_BYTES = b"MZ" + b"game-client" * 50000


@pytest.fixture
def workspace(tmp_path):
    clients = tmp_path / "clients"
    clients.mkdir()
    (clients / "launcher.exe").write_bytes(LAUNCHER_BYTES)
    (clients / "Loil.exe").write_bytes(GAME_BYTES)

    news_dir = tmp_path / "news"
    news_dir.mkdir()
    (news_dir / "news.json").write_text(json.dumps(NEWS, ensure_ascii=False), encoding="utf-8")

    images = tmp_path / "images"
    images.mkdir()
    (images / "season2.jpg").write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return tmp_path


@pytest.fixture
def settings(workspace):
    return Settings(
        launcher_version="1.4.2",
        game_version="0.9.17",
        clients_dir=workspace / "clients",
        news_file=workspace / "news" / "news.json",
        images_dir=workspace / "images",
        logs_dir=workspace / "logs",
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
