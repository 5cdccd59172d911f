"""Helpers for thumbnail references, short descriptions and URL checks.

A thumbnail reference is the ``{"url", "filename", "id"}`` mapping stored as
JSON text in ``projects.thumbnail``. ``filename`` and ``id`` are only set when
the image was uploaded through the file registry.
"""

import json
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

SHORT_DESC_MAX_LENGTH = 50
MEDIA_HOST_DOMAIN = "cloudinary.com"


def generate_short_desc(desc: str, max_length: int = SHORT_DESC_MAX_LENGTH) -> str:
    """Truncate a description to ``max_length`` characters with a trailing ellipsis.

    Descriptions that already fit are returned unchanged.
    """
    if len(desc) <= max_length:
        return desc
    return desc[:max_length].strip() + "..."


def is_valid_url(value: Any) -> bool:
    """Check that ``value`` is an absolute http(s) URL."""
    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def make_reference(url: str, filename: Optional[str] = None, file_id: Optional[str] = None) -> Dict[str, Any]:
    """Build a thumbnail reference."""
    return {"url": url, "filename": filename, "id": file_id}


def encode_reference(reference: Dict[str, Any]) -> str:
    """Serialize a thumbnail reference for storage."""
    return json.dumps(reference)


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def decode_reference(raw: Optional[str]) -> Dict[str, Any]:
    """Decode a stored thumbnail reference.

    Legacy rows holding a bare URL (or anything that is not a JSON object)
    decode to ``{"url": raw, "filename": None, "id": None}``.
    """
    try:
        decoded = json.loads(raw) if raw is not None else None
    except (TypeError, ValueError):
        decoded = None

    if not isinstance(decoded, dict):
        return make_reference(raw)

    return make_reference(*(_text_or_none(decoded.get(key)) for key in ("url", "filename", "id")))


def is_same_thumbnail(old: Optional[Dict[str, Any]], new: Optional[Dict[str, Any]]) -> bool:
    """Compare two references by url, then id, then filename.

    A field only counts when it is set on both sides.
    """
    if not old or not new:
        return False

    for key in ("url", "id", "filename"):
        if old.get(key) and new.get(key) and old[key] == new[key]:
            return True

    return False


def is_media_host_url(url: Any) -> bool:
    """Whether a URL is delivered by the media host."""
    return isinstance(url, str) and MEDIA_HOST_DOMAIN in url


def resolve_public_id(reference: Dict[str, Any], folder: str, strict: bool = False) -> Optional[str]:
    """Find the folder-qualified media host public id of a reference.

    The reference ``id`` wins, with the folder prefixed when missing; otherwise
    the id is read from the delivery URL path (``.../<folder>/<public id>.<ext>``).
    In ``strict`` mode only an ``id`` already inside the folder is accepted.
    """
    file_id = reference.get("id")
    if isinstance(file_id, str) and file_id:
        if file_id.startswith(f"{folder}/"):
            return file_id
        return None if strict else f"{folder}/{file_id}"

    url = reference.get("url")
    if strict or not isinstance(url, str):
        return None

    match = re.search(rf"/{re.escape(folder)}/([^.]+)", url)
    if match:
        return f"{folder}/{match.group(1)}"

    return None


def strip_folder(public_id: str, folder: str) -> str:
    """Remove the folder prefix from a public id."""
    prefix = f"{folder}/"
    return public_id[len(prefix):] if public_id.startswith(prefix) else public_id
