# backend/georef/services/ollama/prompt.py
from typing import Any, Optional
import math
import re

from georef.config import PROMPT_MAX_POINTS, PROMPT_MAX_TEXT

INTRO = " ".join([
    "Sei un assistente di geolocalizzazione che analizza immagini urbane e deve proporre corrispondenze su OpenStreetMap.",
    "Per ogni punto importante individua latitudine, longitudine e un'altitudine stimata (in metri).",
    "Utilizza i punti immagine già noti (coordinate normalizzate 0-1) per capire dove posizionare i marker.",
    "Rispondi SOLO con JSON valido.",
])

SCHEMA = "\n".join([
    "{",
    '  "mapPoints": [',
    "    {",
    '      "description": "breve testo",',
    '      "confidence": 0.0-1.0,',
    '      "imagePoint": { "xNorm": numero, "yNorm": numero },',
    '      "mapPoint": { "lat": numero, "lng": numero, "altitude": numero opzionale }',
    "    }",
    "  ],",
    '  "estimatedPose": { "lat": numero, "lng": numero, "altitude": numero, "heading": numero, "tilt": numero },',
    '  "analysis": "massimo due frasi che riassumono il ragionamento"',
    "}",
])

NO_POINTS = "Nessun punto immagine precedente: proponi tu i landmark più distintivi."
INSTRUCTION = "Fornisci almeno tre punti se possibile e compila sempre i campi numerici."

_NEWLINES = re.compile(r"[\r\n]+")
_SPACES = re.compile(r"\s+")


def sanitize_prompt_text(value: Any) -> str:
    text = "" if value is None else str(value)
    text = _NEWLINES.sub(" ", text)
    text = _SPACES.sub(" ", text).strip()
    return text[:PROMPT_MAX_TEXT]


def _to_number(value: Any) -> Optional[float]:
    # null, false and "" count as 0, true as 1
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _coordinate(point: dict, key: str, fallback_key: str) -> Optional[float]:
    value = point.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    if fallback_key not in point:
        return None
    return _to_number(point[fallback_key])


def _format_point(point: Any, index: int) -> str:
    if not isinstance(point, dict):
        return f"- P{index + 1}"

    ident = point.get("id")
    label = sanitize_prompt_text(point.get("label") or f"P{ident if ident is not None else index + 1}")
    x_norm = _coordinate(point, "xNorm", "normalizedX")
    y_norm = _coordinate(point, "yNorm", "normalizedY")
    coords = ", ".join(c for c in (
        f"xNorm={x_norm:.4f}" if x_norm is not None else None,
        f"yNorm={y_norm:.4f}" if y_norm is not None else None,
    ) if c)

    line = f"- {label}"
    if coords:
        line += f" ({coords})"
    if point.get("description"):
        line += f", descrizione: {sanitize_prompt_text(point['description'])}"
    return line


def format_existing_points(points: Any) -> str:
    if not isinstance(points, list) or not points:
        return NO_POINTS
    lines = [_format_point(p, i) for i, p in enumerate(points[:PROMPT_MAX_POINTS])]
    return "Punti immagine già annotati:\n" + "\n".join(lines)


def format_exif_hint(exif: Optional[dict]) -> Optional[str]:
    if not exif:
        return None
    parts = []
    gps = exif.get("gps_point")
    if gps:
        parts.append(f"GPS lat={gps['lat']:.6f}, lng={gps['lon']:.6f}")
    if exif.get("taken_at"):
        parts.append(f"scattata il {exif['taken_at']}")
    if not parts:
        return None
    return "Metadati EXIF dell'immagine (indicativi): " + "; ".join(parts) + "."


def build_autolocate_prompt(points: Any = None, exif: Optional[dict] = None) -> str:
    lines = [INTRO, format_existing_points(points)]
    hint = format_exif_hint(exif)
    if hint:
        lines.append(hint)
    lines += [INSTRUCTION, SCHEMA]
    return "\n".join(lines)
