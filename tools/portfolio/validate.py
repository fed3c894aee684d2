from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Set

from .config import (
    ABSOLUTE_URL_RE,
    CONTRIB_RANGE,
    FACTS_RANGE,
    MAX_CTAS,
    MIN_SCREENS,
    OPTIONAL_SITE_FIELDS,
    REQUIRED_SITE_FIELDS,
    SCHEMA_TYPES,
    SLUG_RE,
)


class ContentError(ValueError):
    """Raised for the first rule the content document violates."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _require_text(obj: Dict[str, Any], key: str, path: str) -> None:
    if not _is_text(obj.get(key)):
        raise ContentError(f"{path}.{key}", "must be a non-empty string")


def _require_mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ContentError(path, "must be an object")
    return value


def _require_list(
    value: Any,
    path: str,
    min_len: int = 0,
    max_len: Optional[int] = None,
) -> List[Any]:
    if not isinstance(value, list):
        raise ContentError(path, "must be a list")
    if len(value) < min_len or (max_len is not None and len(value) > max_len):
        if max_len is None:
            bound = f"at least {min_len}"
        elif min_len == 0:
            bound = f"at most {max_len}"
        else:
            bound = f"between {min_len} and {max_len}"
        raise ContentError(path, f"must contain {bound} items (got {len(value)})")
    return value


def _require_items(items: List[Any], path: str, keys: tuple) -> None:
    for i, item in enumerate(items):
        item_path = f"{path}[{i}]"
        item = _require_mapping(item, item_path)
        for key in keys:
            _require_text(item, key, item_path)


def _validate_site(site: Dict[str, Any]) -> List[str]:
    for key in REQUIRED_SITE_FIELDS:
        _require_text(site, key, "site")

    sections = _require_list(site.get("indexSections"), "site.indexSections", min_len=1)
    for i, name in enumerate(sections):
        if not _is_text(name):
            raise ContentError(f"site.indexSections[{i}]", "must be a non-empty string")

    if not ABSOLUTE_URL_RE.match(site["canonicalBase"]):
        raise ContentError("site.canonicalBase", "must start with http:// or https://")

    for key in OPTIONAL_SITE_FIELDS:
        if site.get(key) is not None and not isinstance(site[key], str):
            raise ContentError(f"site.{key}", "must be a string when present")

    return sections


def _validate_project(
    project: Any,
    path: str,
    sections: List[str],
    seen_slugs: Set[str],
    seen_orders: Set[float],
) -> None:
    project = _require_mapping(project, path)

    _require_text(project, "slug", path)
    slug = project["slug"]
    if not SLUG_RE.match(slug):
        raise ContentError(f"{path}.slug", f"must match {SLUG_RE.pattern} (got {slug!r})")
    if slug in seen_slugs:
        raise ContentError(f"{path}.slug", f"duplicate slug {slug!r}")
    seen_slugs.add(slug)

    _require_text(project, "title", path)
    _require_text(project, "summary", path)

    _require_text(project, "section", path)
    if project["section"] not in sections:
        raise ContentError(
            f"{path}.section",
            f"unknown section {project['section']!r} (not in site.indexSections)",
        )

    order = project.get("order")
    if not _is_number(order):
        raise ContentError(f"{path}.order", "must be a finite number")
    if order in seen_orders:
        raise ContentError(f"{path}.order", f"duplicate order {order!r}")
    seen_orders.add(order)

    _require_text(project, "serviceIcon", path)
    _require_text(project, "heroImage", path)

    tags = _require_list(project.get("tags"), f"{path}.tags", min_len=1)
    for i, tag in enumerate(tags):
        if not _is_text(tag):
            raise ContentError(f"{path}.tags[{i}]", "must be a non-empty string")

    ctas = project.get("ctas")
    if ctas is not None:
        ctas = _require_list(ctas, f"{path}.ctas", max_len=MAX_CTAS)
        _require_items(ctas, f"{path}.ctas", ("label", "url"))

    facts = _require_list(project.get("facts"), f"{path}.facts", *FACTS_RANGE)
    _require_items(facts, f"{path}.facts", ("label",))
    for i, fact in enumerate(facts):
        value = fact.get("value")
        if not (_is_text(value) or _is_number(value)):
            raise ContentError(
                f"{path}.facts[{i}].value", "must be a non-empty string or a number"
            )

    screens = _require_list(project.get("screens"), f"{path}.screens", min_len=MIN_SCREENS)
    _require_items(screens, f"{path}.screens", ("src", "alt"))

    contrib = _require_list(project.get("contrib"), f"{path}.contrib", *CONTRIB_RANGE)
    for i, item in enumerate(contrib):
        if not _is_text(item):
            raise ContentError(f"{path}.contrib[{i}]", "must be a non-empty string")

    if project.get("designNotes") is not None:
        notes = _require_list(project["designNotes"], f"{path}.designNotes")
        _require_items(notes, f"{path}.designNotes", ())

    if project.get("links") is not None:
        links = _require_list(project["links"], f"{path}.links")
        _require_items(links, f"{path}.links", ("label", "url"))

    if project.get("featured") is not None and not isinstance(project["featured"], bool):
        raise ContentError(f"{path}.featured", "must be true or false")

    schema_type = project.get("schemaType")
    if schema_type is not None and schema_type not in SCHEMA_TYPES:
        raise ContentError(
            f"{path}.schemaType", f"must be one of {', '.join(SCHEMA_TYPES)}"
        )


def validate_content(content: Any) -> None:
    """
    Check the whole content document and raise `ContentError` for the
    first violation. The checks always run in the same order, so a given
    malformed document always reports the same error.
    """
    if not isinstance(content, dict):
        raise ContentError("$", "content document must be an object")

    site = _require_mapping(content.get("site"), "site")
    sections = _validate_site(site)

    projects = content.get("projects")
    if not isinstance(projects, list) or not projects:
        raise ContentError("projects", "must be a non-empty list")

    seen_slugs: Set[str] = set()
    seen_orders: Set[float] = set()
    for i, project in enumerate(projects):
        _validate_project(project, f"projects[{i}]", sections, seen_slugs, seen_orders)
