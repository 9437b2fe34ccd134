# backend/georef/services/storage/uploads.py
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional
import random
import time

from georef.config import ALLOWED_EXTENSIONS, ALLOWED_MIME_TYPES

REJECTED_TYPE_MESSAGE = "Solo immagini sono consentite (jpeg, jpg, png, webp)"


@dataclass(frozen=True)
class UploadRejection:
    reason: str
    extension: str
    content_type: str


def validate_image(filename: str, content_type: Optional[str]) -> Optional[UploadRejection]:
    """Return None when both the extension and the MIME type are allowed images."""
    ext = PurePath(filename or "").suffix.lower()
    mime = (content_type or "").split(";")[0].strip().lower()
    if ext in ALLOWED_EXTENSIONS and mime in ALLOWED_MIME_TYPES:
        return None
    return UploadRejection(reason=REJECTED_TYPE_MESSAGE, extension=ext, content_type=mime)


def generate_filename(field: str, original_name: str) -> str:
    # <field>-<epoch_ms>-<rand><ext>
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field}-{suffix}{PurePath(original_name).suffix}"


def store_image(upload_dir: Path, field: str, original_name: str, data: bytes) -> str:
    upload_dir.mkdir(parents=True, exist_ok=True)
    while True:
        filename = generate_filename(field, original_name)
        try:
            # "x": never overwrite an earlier upload
            with open(upload_dir / filename, "xb") as f:
                f.write(data)
        except FileExistsError:
            continue
        return filename


def resolve_upload(upload_dir: Path, filename: str) -> Optional[Path]:
    """
    Map a client supplied name to a file directly inside upload_dir.
    Directory components are discarded; returns None when nothing matches.
    """
    name = PurePath(filename.replace("\\", "/")).name
    if name in ("", ".", ".."):
        return None
    try:
        root = upload_dir.resolve()
        path = (root / name).resolve()
        if path.parent != root or not path.is_file():
            return None
    except (OSError, ValueError):
        # NUL bytes, names over the OS length limit
        return None
    return path
