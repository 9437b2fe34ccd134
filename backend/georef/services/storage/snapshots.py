# backend/georef/services/storage/snapshots.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
import json
import time


def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def write_snapshot(data_dir: Path, image_name: str, points: list[Any]) -> str:
    """
    Persist one coordinates_<epoch_ms>.json snapshot and return its file name.
    Files are created exclusively; on a clash the millisecond stamp moves forward.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    data = {
        "imageName": image_name,
        "points": points,
        "timestamp": iso_timestamp(),
    }
    body = json.dumps(data, indent=2, ensure_ascii=False)

    stamp = int(time.time() * 1000)
    while True:
        filename = f"coordinates_{stamp}.json"
        try:
            f = open(data_dir / filename, "x", encoding="utf-8")
        except FileExistsError:
            stamp += 1
            continue
        try:
            with f:
                f.write(body)
        except OSError:
            # no half-written snapshot left behind
            (data_dir / filename).unlink(missing_ok=True)
            raise
        return filename


def read_snapshot(data_dir: Path, filename: str) -> dict:
    return json.loads((data_dir / filename).read_text(encoding="utf-8"))
