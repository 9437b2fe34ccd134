# backend/georef/api/routers/uploads.py
from fastapi import APIRouter, Depends, File, Request, UploadFile
import logging

from georef.api.deps import get_settings
from georef.config import MAX_UPLOAD_BYTES, Settings
from georef.errors import ClientInputError, InternalError, PayloadTooLargeError
from georef.schemas.uploads import UploadOut
from georef.services.storage.uploads import store_image, validate_image

router = APIRouter()
logger = logging.getLogger(__name__)

FIELD_NAME = "image"


@router.post("/upload-image")
def upload_image(
    request: Request,
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
) -> UploadOut:
    if image is None or not image.filename:
        raise ClientInputError("Nessun file caricato")

    # type check before anything touches the disk
    rejection = validate_image(image.filename, image.content_type)
    if rejection:
        logger.info("upload rejected: ext=%r mime=%r", rejection.extension, rejection.content_type)
        raise ClientInputError(rejection.reason)

    data = image.file.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError("File troppo grande (massimo 20MB)")

    try:
        filename = store_image(settings.upload_dir, FIELD_NAME, image.filename, data)
    except OSError as exc:
        logger.exception("Errore durante il caricamento")
        raise InternalError("Errore durante il caricamento del file") from exc

    image_url = f"{str(request.base_url).rstrip('/')}/uploads/{filename}"
    logger.info("stored upload %s (%d bytes)", filename, len(data))
    return UploadOut(
        message="Immagine caricata con successo",
        imageUrl=image_url,
        filename=filename,
    )
