# backend/georef/schemas/client_log.py
from pydantic import BaseModel
from typing import Any


class ClientLogIn(BaseModel):
    level: Any = "info"
    message: Any = ""
    details: Any = None
