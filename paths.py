# paths.py — folder paths, generated filenames and resize URLs (no I/O)
from __future__ import annotations
import os
import re
import threading
import time
from datetime import datetime
from urllib.parse import urlparse, urlencode, parse_qsl, urlunparse

from errors import ValidationError

MEDIA_TYPES = ("gallery", "news")

_NON_SLUG = re.compile(r"[^a-z0-9\s-]")
_SPACES   = re.compile(r"\s+")
_DASHES   = re.compile(r"-+")

_stamp_lock = threading.Lock()
_last_stamp = 0


def slugify(title: str) -> str:
    if not isinstance(title, str):
        raise ValidationError("title must be a string")
    s = _NON_SLUG.sub("", title.lower())
    s = _SPACES.sub("-", s)
    s = _DASHES.sub("-", s)
    return s.strip("-")


def derive_folder_path(title: str, media_type: str, now: datetime | None = None) -> str:
    """
    /news/YYYY/MM for news (the title is ignored),
    /gallery/YYYY/MM/<slug> for galleries.
    """
    if not isinstance(title, str):
        raise ValidationError("title must be a string")
    if media_type not in MEDIA_TYPES:
        raise ValidationError(f"unknown media type: {media_type!r}")
    now = now or datetime.now()
    base = f"/{media_type}/{now.year}/{now.month:02d}"
    if media_type == "news":
        return base
    slug = slugify(title)
    # nothing left after slugging: the month folder itself
    return f"{base}/{slug}" if slug else base


def path_segments(folder_path: str) -> list[str]:
    return [p for p in (folder_path or "").split("/") if p]


def _micro_stamp() -> int:
    # strictly increasing within the process, so a batch never reuses a name
    global _last_stamp
    with _stamp_lock:
        stamp = max(time.time_ns() // 1000, _last_stamp + 1)
        _last_stamp = stamp
        return stamp


def unique_filename(original_name: str) -> str:
    ext = os.path.splitext(original_name or "")[1].lstrip(".").lower()
    stamp = _micro_stamp()
    return f"{stamp}.{ext}" if ext else str(stamp)


def thumbnail_url(media_url: str, width: int = 300, height: int = 300) -> str:
    u = urlparse(media_url)
    params = [(k, v) for k, v in parse_qsl(u.query, keep_blank_values=True)
              if k not in ("w", "h", "fit")]
    params += [("w", str(width)), ("h", str(height)), ("fit", "crop")]
    return urlunparse(u._replace(query=urlencode(params)))
