# backend/georef/config.py
from pydantic import BaseModel, field_validator
from pathlib import Path
from typing import Optional
import os

MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20MB
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".webp"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}

OLLAMA_TEMPERATURE = 0.15
PROMPT_MAX_POINTS = 12
PROMPT_MAX_TEXT = 160
UPSTREAM_DETAIL_MAX = 400


def _default_base_dir() -> Path:
    _container_app = Path("/app")
    if (_container_app / "uploads").exists():
        return _container_app
    # backend/georef/config.py → ../.. = <repo root>
    return Path(__file__).resolve().parents[2]


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    ollama_url: str = "http://127.0.0.1:11434"
    ollama_timeout: Optional[float] = None  # None = wait indefinitely
    upload_dir: Path
    data_dir: Path
    public_dir: Path
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        base = Path(os.getenv("GEOREF_BASE_DIR") or _default_base_dir())
        timeout = os.getenv("OLLAMA_TIMEOUT")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            ollama_url=os.getenv("OLLAMA_URL") or "http://127.0.0.1:11434",
            ollama_timeout=float(timeout) if timeout else None,
            upload_dir=Path(os.getenv("UPLOAD_DIR") or base / "uploads"),
            data_dir=Path(os.getenv("DATA_DIR") or base / "data"),
            public_dir=Path(os.getenv("PUBLIC_DIR") or base / "public"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @field_validator("ollama_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
