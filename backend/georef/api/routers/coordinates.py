# backend/georef/api/routers/coordinates.py
from fastapi import APIRouter, Depends
import logging

from georef.api.deps import get_settings
from georef.config import Settings
from georef.errors import ClientInputError, InternalError
from georef.schemas.coordinates import CoordinatesIn, CoordinatesOut
from georef.services.storage.snapshots import write_snapshot

router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_DATA = "Dati non validi"


@router.post("/save-coordinates")
def save_coordinates(payload: CoordinatesIn, settings: Settings = Depends(get_settings)) -> CoordinatesOut:
    if not payload.imageName or payload.points is None:
        raise ClientInputError(INVALID_DATA)

    try:
        filename = write_snapshot(settings.data_dir, payload.imageName, payload.points)
    except (OSError, TypeError, ValueError) as exc:
        logger.exception("Errore durante il salvataggio delle coordinate")
        raise InternalError("Errore durante il salvataggio delle coordinate") from exc

    logger.info("saved %d points for %s -> %s", len(payload.points), payload.imageName, filename)
    return CoordinatesOut(message="Coordinate salvate con successo", filePath=filename)
