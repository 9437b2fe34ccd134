# backend/georef/schemas/ollama.py
from pydantic import BaseModel
from typing import Any, Optional


class ModelsOut(BaseModel):
    success: bool = True
    # {name, modified, size, parameterSize, quantization, family}
    models: list[dict[str, Any]]


class AutoLocateIn(BaseModel):
    model: Optional[str] = None
    filename: Optional[str] = None
    existingPoints: Any = None  # list expected; anything else means "no points"


class AutoLocateOut(BaseModel):
    success: bool = True
    suggestions: list[Any]
    pose: Optional[Any] = None
    analysis: Any = None
    raw: str
