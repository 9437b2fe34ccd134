# backend/georef/schemas/commons.py
from pydantic import BaseModel
from typing import Optional


class ErrorOut(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
