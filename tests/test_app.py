from pathlib import Path

from fastapi.testclient import TestClient

from georef.config import Settings
from georef.main import create_app


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_cors_allows_any_origin(client):
    res = client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert res.headers["access-control-allow-origin"] == "*"


def test_public_dir_is_served_when_present(settings):
    settings.public_dir.mkdir(parents=True)
    (settings.public_dir / "index.html").write_text("<h1>georef</h1>", encoding="utf-8")
    with TestClient(create_app(settings)) as c:
        assert c.get("/").text == "<h1>georef</h1>"
        assert c.get("/health").json() == {"ok": True}


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GEOREF_BASE_DIR", str(tmp_path))
    monkeypatch.setenv("OLLAMA_URL", "http://gpu-box:11434///")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.delenv("UPLOAD_DIR", raising=False)
    monkeypatch.delenv("DATA_DIR", raising=False)
    monkeypatch.delenv("OLLAMA_TIMEOUT", raising=False)
    s = Settings.from_env()
    assert s.ollama_url == "http://gpu-box:11434"
    assert s.port == 8080
    assert s.ollama_timeout is None
    assert s.upload_dir == Path(tmp_path) / "uploads"
    assert s.data_dir == Path(tmp_path) / "data"


def test_settings_defaults(monkeypatch, tmp_path):
    for var in ("OLLAMA_URL", "PORT", "OLLAMA_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("GEOREF_BASE_DIR", str(tmp_path))
    s = Settings.from_env()
    assert s.ollama_url == "http://127.0.0.1:11434"
    assert s.port == 3000
