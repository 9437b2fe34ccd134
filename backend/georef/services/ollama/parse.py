# backend/georef/services/ollama/parse.py
from typing import Iterator, Optional
import json

MAX_CANDIDATES = 64


def _balanced_spans(text: str, limit: int = MAX_CANDIDATES) -> Iterator[tuple[int, int]]:
    """
    Yield (start, end) of each balanced {...} span, left to right.
    Braces inside JSON strings are ignored. At most `limit` opening braces are tried.
    """
    start = text.find("{")
    tried = 0
    while start != -1 and tried < limit:
        tried += 1
        depth = 0
        in_string = False
        escaped = False
        end = None
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    end = i + 1
                    break
        if end is not None:
            yield start, end
        start = text.find("{", start + 1)


def extract_json_object(text: Optional[str]) -> Optional[dict]:
    """Best effort: the first JSON object found in a model's free text, else None."""
    if not text:
        return None
    try:
        whole = json.loads(text)
    except ValueError:
        whole = None
    if isinstance(whole, dict):
        return whole

    for start, end in _balanced_spans(text):
        try:
            parsed = json.loads(text[start:end])
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def build_suggestion(raw: str) -> dict:
    parsed = extract_json_object(raw) or {}
    map_points = parsed.get("mapPoints")
    return {
        "suggestions": map_points if isinstance(map_points, list) else [],
        "pose": parsed.get("estimatedPose") or None,
        "analysis": parsed.get("analysis") or parsed.get("reasoning") or raw,
        "raw": raw,
    }
