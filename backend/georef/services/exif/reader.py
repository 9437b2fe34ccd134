# backend/georef/services/exif/reader.py
from PIL import Image
import exifread
from datetime import datetime
from pathlib import Path
from typing import Optional

EXIF_DT_KEYS = ["EXIF DateTimeOriginal", "EXIF DateTimeDigitized", "Image DateTime"]
GPS_IFD = 0x8825


def _to_deg(values, ref) -> Optional[float]:
    # (deg, min, sec) as IFDRational or numbers
    if not values or len(values) < 3:
        return None
    d, m, s = (float(v) for v in values[:3])
    deg = d + m / 60 + s / 3600
    if ref in ("S", "W"):
        deg *= -1
    return deg


def parse_exif(path: Path) -> dict:
    """Capture time (ExifRead) and GPS position (Pillow) of an uploaded image."""
    with open(path, "rb") as f:
        tags = exifread.process_file(f, details=False)

    with Image.open(path) as img:
        gps_info = img.getexif().get_ifd(GPS_IFD)

    lon = lat = None
    if gps_info:
        lat = _to_deg(gps_info.get(2), gps_info.get(1))
        lon = _to_deg(gps_info.get(4), gps_info.get(3))

    taken_at = None
    for k in EXIF_DT_KEYS:
        if k in tags:
            try:
                taken_at = datetime.strptime(str(tags[k]), "%Y:%m:%d %H:%M:%S")
                break
            except ValueError:
                pass

    return {
        "taken_at": taken_at.isoformat() if taken_at else None,
        "gps_point": {"lon": lon, "lat": lat} if (lon is not None and lat is not None) else None,
    }
