# backend/georef/api/routers/client_log.py
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from typing import Any
import logging

from georef.schemas.client_log import ClientLogIn
from georef.services.clientlog.format import format_client_log, python_log_level

router = APIRouter()
logger = logging.getLogger(__name__)
client_logger = logging.getLogger("georef.client")


@router.post("/log")
def relay_client_log(body: Any = Body(None)):
    try:
        # arrays, scalars or no body at all fall back to the defaults
        payload = ClientLogIn.model_validate(body if isinstance(body, dict) else {})
        line = format_client_log(payload.level, payload.message, payload.details)
    except Exception:
        logger.exception("Errore durante la registrazione del log client")
        return JSONResponse(status_code=500, content={"success": False})
    client_logger.log(python_log_level(payload.level), line)
    return {"success": True}
