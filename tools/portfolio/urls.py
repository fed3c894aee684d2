from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import PROJECTS_DIR_NAME
from .utils import is_absolute_url


def normalize_base_path(value: Optional[str]) -> str:
    """`""`/`"/"` -> `""`; anything else gets one leading slash and no trailing one."""
    path = (value or "").strip().strip("/")
    return f"/{path}" if path else ""


def with_base_path(base_path: str, path: str) -> str:
    if is_absolute_url(path):
        return path
    normalized = path if path.startswith("/") else f"/{path}"
    return f"{base_path}{normalized}" if base_path else normalized


def to_absolute_url(canonical_base: str, base_path: str, path: str) -> str:
    if is_absolute_url(path):
        return path
    return f"{canonical_base.rstrip('/')}{with_base_path(base_path, path)}"


@dataclass(frozen=True)
class UrlResolver:
    """
    Every asset and page reference is written absolute-from-root with the
    base path prefixed (`/sub/projects/demo/`). Page-relative `../../`
    addressing is not used anywhere.
    """

    canonical_base: str
    base_path: str = ""

    @classmethod
    def create(cls, canonical_base: str, base_path: Optional[str]) -> "UrlResolver":
        return cls(canonical_base.rstrip("/"), normalize_base_path(base_path))

    def href(self, path: str) -> str:
        return with_base_path(self.base_path, path)

    def link(self, url: str) -> str:
        # Only root paths get the base path. //host URLs are protocol-relative, not root paths.
        if url.startswith("/") and not url.startswith("//"):
            return self.href(url)
        return url

    def absolute(self, path: str) -> str:
        return to_absolute_url(self.canonical_base, self.base_path, path)

    @property
    def home_path(self) -> str:
        return self.href("/")

    @property
    def home_url(self) -> str:
        return self.absolute("/")

    def project_path(self, slug: str) -> str:
        return self.href(f"/{PROJECTS_DIR_NAME}/{slug}/")

    def project_url(self, slug: str) -> str:
        return self.absolute(f"/{PROJECTS_DIR_NAME}/{slug}/")
