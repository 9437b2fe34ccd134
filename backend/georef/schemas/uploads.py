# backend/georef/schemas/uploads.py
from pydantic import BaseModel


class UploadOut(BaseModel):
    success: bool = True
    message: str
    imageUrl: str
    filename: str
