# backend/georef/schemas/coordinates.py
from pydantic import BaseModel
from typing import Any, Optional


class CoordinatesIn(BaseModel):
    # points: shape of each entry is up to the client
    imageName: Optional[str] = None
    points: Optional[list[Any]] = None


class CoordinatesOut(BaseModel):
    success: bool = True
    message: str
    filePath: str
