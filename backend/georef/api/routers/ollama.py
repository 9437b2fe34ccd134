# backend/georef/api/routers/ollama.py
from fastapi import APIRouter, Depends
from pathlib import Path
from typing import Optional
import base64
import logging

from georef.api.deps import get_ollama, get_settings
from georef.config import OLLAMA_TEMPERATURE, Settings
from georef.errors import ClientInputError, InternalError, NotFoundError, UpstreamError
from georef.schemas.ollama import AutoLocateIn, AutoLocateOut, ModelsOut
from georef.services.exif.reader import parse_exif
from georef.services.ollama.client import OllamaClient
from georef.services.ollama.parse import build_suggestion
from georef.services.ollama.prompt import build_autolocate_prompt
from georef.services.storage.uploads import resolve_upload

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/models")
def list_models(ollama: OllamaClient = Depends(get_ollama)) -> ModelsOut:
    try:
        models = ollama.list_models()
    except UpstreamError as exc:
        logger.warning("Errore nel recupero dei modelli Ollama: %s", exc.details)
        raise
    return ModelsOut(models=models)


def _exif_hint(path: Path) -> Optional[dict]:
    # best effort; a missing or broken EXIF block only drops the hint
    try:
        return parse_exif(path)
    except Exception as exc:
        logger.warning("EXIF non leggibile per %s: %s", path.name, exc)
        return None


@router.post("/autolocate")
def autolocate(
    payload: AutoLocateIn | None = None,
    settings: Settings = Depends(get_settings),
    ollama: OllamaClient = Depends(get_ollama),
) -> AutoLocateOut:
    payload = payload or AutoLocateIn()
    if not payload.model:
        raise ClientInputError("Specificare il modello Ollama da utilizzare.")
    if not payload.filename:
        raise ClientInputError("Nessuna immagine associata alla richiesta.")

    path = resolve_upload(settings.upload_dir, payload.filename)
    if path is None:
        raise NotFoundError("Immagine non trovata sul server.")

    try:
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    except OSError as exc:
        logger.exception("Errore nella lettura di %s", path.name)
        raise InternalError("Impossibile leggere l'immagine dal server.") from exc

    prompt = build_autolocate_prompt(payload.existingPoints, exif=_exif_hint(path))
    try:
        raw = ollama.generate(payload.model, prompt, [encoded], OLLAMA_TEMPERATURE)
    except UpstreamError as exc:
        logger.warning("Errore durante la localizzazione via Ollama: %s", exc.details)
        raise

    suggestion = build_suggestion(raw)
    logger.info("autolocate %s with %s: %d suggestions", path.name, payload.model, len(suggestion["suggestions"]))
    return AutoLocateOut(**suggestion)
