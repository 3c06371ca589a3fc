# transcoders.py

"""Pure conversions from platform wire values to local field values.

None of these raise on bad input: malformed values degrade to ``None`` (or an
empty list) and, where the input was present but unusable, log a warning.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any

import structlog

log = structlog.get_logger()

_CONTENT_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".txt": "text/plain",
    ".json": "application/json",
    ".zip": "application/zip",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a datetime, an ISO-8601 string or Unix epoch seconds into aware UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        if isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        if isinstance(value, int) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        pass
    log.warning("transcode.timestamp.unparseable", value=repr(value)[:64])
    return None


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def canonicalize_permission_overwrites(value: Any) -> list[dict[str, Any]]:
    """Normalize overwrites to ``[{"id", "type", "allow": str, "deny": str}]``.

    A single overwrite becomes a one-element list; missing type/allow/deny take
    their zero defaults. Any other input yields an empty list.
    """
    if value is None:
        return []
    if isinstance(value, Mapping) or hasattr(value, "model_dump"):
        entries = [value]
    elif isinstance(value, (list, tuple)):
        entries = list(value)
    else:
        return []

    out: list[dict[str, Any]] = []
    for entry in entries:
        if not (isinstance(entry, Mapping) or hasattr(entry, "model_dump")):
            continue
        type_ = _get(entry, "type")
        allow = _get(entry, "allow")
        deny = _get(entry, "deny")
        out.append(
            {
                "id": _get(entry, "id"),
                "type": 0 if type_ is None else type_,
                "allow": "0" if allow is None else str(allow),
                "deny": "0" if deny is None else str(deny),
            }
        )
    return out


def synthesize_placeholder_email(platform_id: Any, domain: str) -> str:
    return f"discord+{platform_id}@{domain}"


def extract_nested_id(value: Any) -> Any:
    """Return ``value.id`` for a nested ``{"id": ...}`` object, else None."""
    if isinstance(value, Mapping):
        return value.get("id")
    if hasattr(value, "model_dump"):
        return getattr(value, "id", None)
    return None


def coerce_snowflake(value: Any) -> int | None:
    """Accept an int or an all-digit string; reject everything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def emoji_key(emoji_id: Any, name: str | None) -> str | None:
    """Stable key for an emoji: the custom id, else the unicode name."""
    if emoji_id is not None:
        return str(emoji_id)
    return name or None


def infer_content_type(filename: str | None) -> str | None:
    if filename is None:
        return None
    suffix = PurePosixPath(filename).suffix.lower()
    return _CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)
