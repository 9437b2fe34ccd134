import io
import os
import tempfile
from unittest import mock

import pytest
import requests
from PIL import Image

# module-level app in georef.main must not touch the repo tree
os.environ.setdefault("GEOREF_BASE_DIR", tempfile.mkdtemp(prefix="georef-"))

from fastapi.testclient import TestClient  # noqa: E402

from georef.config import Settings  # noqa: E402
from georef.main import create_app  # noqa: E402
from georef.services.ollama.client import OllamaClient  # noqa: E402


def make_image_bytes(fmt: str = "PNG", size=(8, 6), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def fake_response(status_code: int = 200, json_data=None, text: str = ""):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = text
    resp.json.return_value = json_data
    return resp


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        ollama_url="http://ollama.test:11434/",
        upload_dir=tmp_path / "uploads",
        data_dir=tmp_path / "data",
        public_dir=tmp_path / "public",
    )


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def client(settings, session):
    ollama = OllamaClient(settings.ollama_url, session=session)
    app = create_app(settings, ollama_client=ollama)
    with TestClient(app) as c:
        yield c
