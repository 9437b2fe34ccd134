# backend/georef/services/ollama/client.py
from typing import Optional
import logging
import requests

from georef.config import UPSTREAM_DETAIL_MAX
from georef.errors import UpstreamError

logger = logging.getLogger(__name__)

MODELS_ERROR = "Impossibile recuperare i modelli disponibili da Ollama"
AUTOLOCATE_ERROR = "Impossibile completare la localizzazione tramite Ollama"


def project_model(model: dict) -> dict:
    details = model.get("details")
    if not isinstance(details, dict):
        details = {}
    family = details.get("family")
    if family is None:
        family = model.get("model")
    return {
        "name": model.get("name"),
        "modified": model.get("modified_at"),
        "size": model.get("size"),
        "parameterSize": details.get("parameter_size"),
        "quantization": details.get("quantization_level"),
        "family": family,
    }


class OllamaClient:
    """
    Thin wrapper over the Ollama HTTP API (/api/tags, /api/generate).
    One instance is shared by the whole process; no retries.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_models(self) -> list[dict]:
        try:
            resp = self.session.get(f"{self.base_url}/api/tags", timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(MODELS_ERROR, details=str(exc)) from exc
        if not resp.ok:
            raise UpstreamError(MODELS_ERROR, details=f"Status {resp.status_code}: {resp.text[:UPSTREAM_DETAIL_MAX]}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError(MODELS_ERROR, details=f"Risposta non valida: {exc}") from exc

        models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            return []
        return [project_model(m) for m in models if isinstance(m, dict)]

    def generate(self, model: str, prompt: str, images: list[str], temperature: float) -> str:
        body = {
            "model": model,
            "prompt": prompt,
            "images": images,
            "stream": False,
            "options": {"temperature": temperature},
        }
        try:
            resp = self.session.post(f"{self.base_url}/api/generate", json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(AUTOLOCATE_ERROR, details=str(exc)) from exc
        if not resp.ok:
            detail = resp.text[:UPSTREAM_DETAIL_MAX]
            raise UpstreamError(AUTOLOCATE_ERROR, details=f"Richiesta a Ollama fallita ({resp.status_code}): {detail}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError(AUTOLOCATE_ERROR, details=f"Risposta non valida: {exc}") from exc

        text = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            text = ""
        logger.debug("ollama generate model=%s chars=%d", model, len(text))
        return text.strip()

    def close(self) -> None:
        self.session.close()
