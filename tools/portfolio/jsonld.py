from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .config import APP_RE, APPLICATION_CATEGORY, JSON_LD_DESCRIPTION_MAX
from .urls import UrlResolver
from .utils import truncate

SCHEMA_CONTEXT = "https://schema.org"


def classify_project(project: Dict[str, Any]) -> str:
    """
    `schemaType` wins when set. Otherwise anything mentioning "app" in its
    title or tags is a SoftwareApplication, the rest CreativeWork.
    """
    if project.get("schemaType"):
        return project["schemaType"]
    haystack = " ".join([project.get("title") or "", *(project.get("tags") or [])]).lower()
    return "SoftwareApplication" if APP_RE.search(haystack) else "CreativeWork"


def _platform(project: Dict[str, Any]) -> Optional[str]:
    for fact in project.get("facts") or []:
        if str(fact.get("label") or "").strip().lower() == "platform":
            return str(fact.get("value"))
    return None


def person_entity(site: Dict[str, Any], urls: UrlResolver) -> Dict[str, Any]:
    return {
        "@type": "Person",
        "name": site["personName"],
        "url": site.get("personUrl") or urls.home_url,
    }


def website_entity(site: Dict[str, Any], urls: UrlResolver) -> Dict[str, Any]:
    return {
        "@type": "WebSite",
        "name": site["title"],
        "description": site["description"],
        "url": urls.home_url,
    }


def work_entity(project: Dict[str, Any], site: Dict[str, Any], urls: UrlResolver) -> Dict[str, Any]:
    kind = classify_project(project)
    work: Dict[str, Any] = {
        "@type": kind,
        "name": project["title"],
        "description": truncate(project["summary"], JSON_LD_DESCRIPTION_MAX),
        "image": urls.absolute(project["heroImage"]),
        "url": urls.project_url(project["slug"]),
        "keywords": ", ".join(project["tags"]),
        "author": {"@type": "Person", "name": site["personName"]},
    }
    if kind == "SoftwareApplication":
        platform = _platform(project)
        if platform:
            work["operatingSystem"] = platform
            work["applicationCategory"] = APPLICATION_CATEGORY
    return work


def build_graph(
    site: Dict[str, Any],
    urls: UrlResolver,
    project: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    graph: List[Dict[str, Any]] = [person_entity(site, urls), website_entity(site, urls)]
    if project is not None:
        graph.append(work_entity(project, site, urls))
    return {"@context": SCHEMA_CONTEXT, "@graph": graph}


def serialize_json_ld(data: Dict[str, Any]) -> str:
    # Safe inside <script type="application/ld+json">.
    blob = json.dumps(data, ensure_ascii=False, indent=2)
    return blob.replace("<", "\\u003c").replace(">", "\\u003e")
