from __future__ import annotations

import os
import pathlib
import shutil
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import (
    BASE_PATH_ENV,
    DEFAULT_ASPECT,
    INDEX_TEMPLATE,
    META_DESCRIPTION_MAX,
    PROJECT_TEMPLATE,
    PROJECTS_DIR_NAME,
)
from .fragments import (
    build_contrib,
    build_ctas,
    build_design_notes,
    build_facts,
    build_links,
    build_pagination,
    build_project_cards,
    build_project_sections,
    build_screens,
    build_tags,
    build_topbar_cta,
)
from .jsonld import build_graph, serialize_json_ld
from .render import render_template
from .urls import UrlResolver
from .utils import ensure_dir, escape, load_document, read_text, truncate
from .validate import validate_content


@dataclass(frozen=True)
class BuildContext:
    site: Dict[str, Any]
    urls: UrlResolver

    @property
    def sections(self) -> List[str]:
        return list(self.site["indexSections"])


def resolve_base_path(site: Dict[str, Any], override: Optional[str] = None) -> Optional[str]:
    """`override` (the --base-path flag) beats the environment, which beats site.basePath."""
    if override is not None:
        return override
    env = os.getenv(BASE_PATH_ENV)
    if env is not None:
        return env
    return site.get("basePath")


def make_context(site: Dict[str, Any], base_path: Optional[str] = None) -> BuildContext:
    urls = UrlResolver.create(site["canonicalBase"], resolve_base_path(site, base_path))
    return BuildContext(site=site, urls=urls)


def sort_projects(projects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(projects, key=lambda p: p["order"])


def project_output_path(slug: str) -> str:
    return f"{PROJECTS_DIR_NAME}/{slug}/index.html"


def render_index(template: str, ctx: BuildContext, projects: List[Dict[str, Any]]) -> str:
    site, urls = ctx.site, ctx.urls
    title = escape(site["title"])
    description = escape(truncate(site["description"], META_DESCRIPTION_MAX))
    canonical = urls.home_url
    return render_template(
        template,
        {
            "PAGE_TITLE": title,
            "META_DESCRIPTION": description,
            "CANONICAL_URL": escape(canonical),
            "CANONICAL": escape(canonical),
            "OG_TITLE": title,
            "OG_DESCRIPTION": description,
            "OG_IMAGE": escape(urls.absolute(site["ogImageDefault"])),
            "OG_URL": escape(canonical),
            "SITE_TITLE": title,
            "SITE_DESCRIPTION": escape(site["description"]),
            "PERSON_NAME": escape(site["personName"]),
            "PROFILE_IMAGE": escape(urls.href(site["profileImage"])),
            "ASSET_PREFIX": escape(urls.base_path),
            "PROJECT_SECTIONS": build_project_sections(projects, ctx.sections, urls),
            "PROJECT_CARDS": build_project_cards(projects, urls),
            "JSON_LD": serialize_json_ld(build_graph(site, urls)),
        },
    )


def render_project(
    template: str,
    ctx: BuildContext,
    project: Dict[str, Any],
    prev: Optional[Dict[str, Any]] = None,
    next_: Optional[Dict[str, Any]] = None,
) -> str:
    site, urls = ctx.site, ctx.urls
    canonical = urls.project_url(project["slug"])
    summary = escape(truncate(project["summary"], META_DESCRIPTION_MAX))
    screens = project["screens"]
    primary_screen, secondary_screens = build_screens(screens, urls)
    hero_ctas = build_ctas(project.get("ctas"), urls)
    pagination = build_pagination(prev, next_, urls)

    return render_template(
        template,
        {
            "PAGE_TITLE": escape(f"{project['title']} | {site['title']}"),
            "META_DESCRIPTION": summary,
            "CANONICAL_URL": escape(canonical),
            "CANONICAL": escape(canonical),
            "OG_TITLE": escape(project["title"]),
            "OG_DESCRIPTION": summary,
            "OG_IMAGE": escape(urls.absolute(project["heroImage"])),
            "OG_URL": escape(canonical),
            "SITE_TITLE": escape(site["title"]),
            "HOME_URL": escape(urls.home_path),
            "ASSET_PREFIX": escape(urls.base_path),
            "TOPBAR_CTA": build_topbar_cta(project.get("ctas"), urls),
            "PROJECT_TITLE": escape(project["title"]),
            "PROJECT_SUMMARY": escape(project["summary"]),
            "PROJECT_TAGS": build_tags(project["tags"]),
            "SERVICE_ICON": escape(urls.href(project["serviceIcon"])),
            "HERO_CTAS": hero_ctas,
            "HERO_CTA": hero_ctas,
            "HERO_IMAGE": escape(urls.href(project["heroImage"])),
            "HERO_ASPECT": escape(screens[0].get("aspect") or DEFAULT_ASPECT),
            "FACT_CARDS": build_facts(project["facts"]),
            "PRIMARY_SCREEN": primary_screen,
            "SECONDARY_SCREENS": secondary_screens,
            "SCREEN_CARDS": primary_screen + secondary_screens,
            "CONTRIB_LIST": build_contrib(project["contrib"]),
            "DESIGN_NOTES_SECTION": build_design_notes(project.get("designNotes")),
            "LINKS_SECTION": build_links(project.get("links"), urls),
            "PAGINATION": pagination,
            "PREV_NEXT": pagination,
            "JSON_LD": serialize_json_ld(build_graph(site, urls, project)),
        },
    )


def render_site(
    content: Any,
    index_template: str,
    project_template: str,
    base_path: Optional[str] = None,
) -> Dict[str, str]:
    """
    Validate `content` and render every page in memory.

    Returns relative output path -> HTML, index first, then projects in
    ascending `order`. Nothing touches the filesystem here, so a
    validation error leaves any previous output untouched.
    """
    validate_content(content)
    ctx = make_context(content["site"], base_path)
    projects = sort_projects(content["projects"])

    pages: Dict[str, str] = {"index.html": render_index(index_template, ctx, projects)}
    for i, project in enumerate(projects):
        prev = projects[i - 1] if i > 0 else None
        next_ = projects[i + 1] if i + 1 < len(projects) else None
        pages[project_output_path(project["slug"])] = render_project(
            project_template, ctx, project, prev, next_
        )
    return pages


def _remove_projects_dir(projects_dir: pathlib.Path, keep: set) -> None:
    if not projects_dir.exists():
        return
    for child in sorted(projects_dir.iterdir()):
        if child.is_dir() and child.name not in keep:
            print(f"- removing stale project folder {child.name}")
    shutil.rmtree(projects_dir)


def write_site(pages: Dict[str, str], out_dir: pathlib.Path) -> List[str]:
    """
    Write rendered pages under `out_dir`. The projects/ directory is wiped
    and recreated first so slugs from earlier builds do not linger.
    """
    ensure_dir(out_dir)
    projects_dir = out_dir / PROJECTS_DIR_NAME
    keep = {
        rel.split("/")[1]
        for rel in pages
        if rel.startswith(f"{PROJECTS_DIR_NAME}/")
    }
    _remove_projects_dir(projects_dir, keep)
    ensure_dir(projects_dir)

    written: List[str] = []
    for rel, body in pages.items():
        target = out_dir / rel
        ensure_dir(target.parent)
        target.write_text(body, encoding="utf-8")
        written.append(rel)
    return written


def load_templates(template_dir: pathlib.Path) -> tuple:
    return (
        read_text(template_dir / INDEX_TEMPLATE),
        read_text(template_dir / PROJECT_TEMPLATE),
    )


def build_site(
    content_path: pathlib.Path,
    template_dir: pathlib.Path,
    out_dir: pathlib.Path,
    base_path: Optional[str] = None,
) -> List[str]:
    content = load_document(content_path)
    index_template, project_template = load_templates(template_dir)
    pages = render_site(content, index_template, project_template, base_path)
    return write_site(pages, out_dir)
