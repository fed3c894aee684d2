from __future__ import annotations

import html
import json
import pathlib
import re
from typing import Any

import yaml

from .config import ABSOLUTE_URL_RE, ANCHOR_RE, ELLIPSIS


def escape(value: Any) -> str:
    """HTML-escape text for element content and attribute values alike."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def is_absolute_url(url: str) -> bool:
    return bool(url) and bool(ABSOLUTE_URL_RE.match(url))


def slugify(s: str) -> str:
    return re.sub(r"-{2,}", "-", ANCHOR_RE.sub("-", s.lower()).strip("-"))


def truncate(text: str, limit: int) -> str:
    """
    Trim `text` to at most `limit` characters. When anything is dropped the
    last kept character is replaced by an ellipsis, so the result never
    exceeds `limit`.
    """
    text = text or ""
    if len(text) <= limit:
        return text
    if limit <= 0:
        return ""
    return text[: limit - 1] + ELLIPSIS


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def read_text(path: pathlib.Path) -> str:
    try:
        return _norm_text(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ValueError(f"could not decode {path}: {e.reason} at byte {e.start}") from e


def load_document(path: pathlib.Path) -> Any:
    """
    Load the content document. `.yml`/`.yaml` files go through PyYAML,
    everything else is parsed as JSON. Shape checks are left to
    `validate.validate_content`.
    """
    text = read_text(path)
    try:
        if path.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ValueError(f"could not parse {path}: {e}") from e
    return {} if data is None else data


def ensure_dir(p: pathlib.Path) -> None:
    p.mkdir(parents=True, exist_ok=True)
