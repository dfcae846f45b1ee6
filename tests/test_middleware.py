from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from launcher_api.core.access_log import AccessLog, category_for
from launcher_api.factory import create_app

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def read_access_log(settings):
    files = list(settings.logs_dir.glob("access_*.log"))
    assert len(files) == 1
    assert files[0].name == f"access_{datetime.now():%Y-%m-%d}.log"
    return files[0].read_text(encoding="utf-8").splitlines()


def assert_cors(headers):
    for key, value in CORS.items():
        assert headers[key] == value


@pytest.mark.parametrize("path", ["/api/news", "/api/version", "/api/download/game", "/api/anything"])
def test_preflight_short_circuits(client, settings, path):
    settings.news_file.unlink()
    r = client.options(path)
    assert r.status_code == 200
    assert r.content == b""
    assert_cors(r.headers)
    assert not settings.logs_dir.exists()


def test_cors_headers_on_success_and_error(client, settings):
    assert_cors(client.get("/api/version").headers)
    (settings.clients_dir / "launcher.exe").unlink()
    r = client.get("/api/download/launcher")
    assert r.status_code == 404
    assert_cors(r.headers)


def test_access_log_line_per_request(client, settings):
    client.get("/api/news")
    client.get("/api/version")
    client.get("/api/download/launcher")
    lines = read_access_log(settings)
    assert len(lines) == 3
    assert lines[0].endswith(" testclient /api/news - news")
    assert lines[1].endswith(" testclient /api/version - version")
    assert lines[2].endswith(" testclient /api/download/launcher - download")
    assert lines[0].startswith(f"[{datetime.now():%Y-%m-%d}")


def test_failed_requests_are_logged_too(client, settings):
    settings.news_file.unlink()
    client.get("/api/news")
    assert len(read_access_log(settings)) == 1


def test_client_ip_from_x_real_ip(client, settings):
    client.get("/api/version", headers={"X-Real-IP": "10.0.0.5", "X-Forwarded-For": "1.2.3.4"})
    assert " 10.0.0.5 /api/version " in read_access_log(settings)[0]


def test_client_ip_from_first_forwarded_entry(client, settings):
    client.get("/api/version", headers={"X-Forwarded-For": " 203.0.113.7 , 10.0.0.1"})
    assert " 203.0.113.7 /api/version " in read_access_log(settings)[0]


def test_images_are_not_access_logged(client, settings):
    r = client.get("/images/season2.jpg")
    assert r.status_code == 200
    assert r.content == b"\xff\xd8\xff\xe0fake-jpeg"
    assert not settings.logs_dir.exists()


def test_images_reject_path_traversal(client):
    assert client.get("/images/../news/news.json").status_code == 404
    assert client.get("/images/%2e%2e/news/news.json").status_code == 404


def test_logging_failure_does_not_affect_response(workspace, settings):
    blocker = workspace / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    app = create_app(settings.model_copy(update={"logs_dir": blocker / "logs"}))
    r = TestClient(app).get("/api/version")
    assert r.status_code == 200
    assert r.json()["launcher_version"] == "1.4.2"


def test_access_log_record_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert AccessLog(blocker).record("1.1.1.1", "/api/news", "news") is False


def test_access_log_record_format(tmp_path):
    log = AccessLog(tmp_path / "logs")
    when = datetime(2024, 5, 17, 8, 30, 1)
    assert log.record("192.168.1.20", "/api/version", "version", when=when)
    content = (tmp_path / "logs" / "access_2024-05-17.log").read_text(encoding="utf-8")
    assert content == "[2024-05-17 08:30:01] 192.168.1.20 /api/version - version\n"


@pytest.mark.parametrize("path, category", [
    ("/api/news", "news"),
    ("/api/version", "version"),
    ("/api/download/game", "download"),
    ("/api/download/launcher/info", "download"),
    ("/api/newsletter", "api"),
])
def test_category_for(path, category):
    assert category_for(path) == category
