"""
HTML fragments for the page templates.

Each builder takes plain content data (plus the `UrlResolver` when it emits
links or images) and returns a markup string that the site builder hands
to `render_template` as a single token value. All user-authored text and
every attribute value goes through `escape`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_ASPECT, DEFAULT_FIT
from .layout import derive_bento
from .urls import UrlResolver
from .utils import escape, is_absolute_url, slugify


def link_attrs(url: str) -> str:
    """External `http(s)://` links open in a new tab; anything else is internal."""
    if is_absolute_url(url):
        return ' target="_blank" rel="noreferrer noopener"'
    return ""


def _anchor(url: str, inner: str, urls: UrlResolver, css_class: str = "") -> str:
    cls = f' class="{escape(css_class)}"' if css_class else ""
    return f'<a{cls} href="{escape(urls.link(url))}"{link_attrs(url)}>{inner}</a>'


def build_tags(tags: Sequence[str]) -> str:
    return "".join(f'<span class="tag">{escape(tag)}</span>' for tag in tags)


def build_facts(facts: Sequence[Dict[str, Any]]) -> str:
    return "".join(
        f"""
        <div class="card fact-card">
          <h3>{escape(fact["label"])}</h3>
          <p>{escape(fact["value"])}</p>
        </div>
      """
        for fact in facts
    )


def build_screen(screen: Dict[str, Any], urls: UrlResolver, large: bool = False) -> str:
    aspect = screen.get("aspect") or DEFAULT_ASPECT
    fit = screen.get("fit") or DEFAULT_FIT
    caption = (
        f'<p class="caption">{escape(screen["caption"])}</p>'
        if screen.get("caption")
        else ""
    )
    return f"""
        <div class="card screen-card{' large' if large else ''}" style="--media-fit:{escape(fit)};">
          <div class="media-frame" style="--media-aspect: {escape(aspect)};">
            <img src="{escape(urls.href(screen["src"]))}" alt="{escape(screen["alt"])}" loading="lazy" />
          </div>
          {caption}
        </div>
      """


def build_screens(screens: Sequence[Dict[str, Any]], urls: UrlResolver) -> Tuple[str, str]:
    """Returns (primary, secondary): the first screen large, the rest as regular cards."""
    if not screens:
        return "", ""
    primary = build_screen(screens[0], urls, large=True)
    secondary = "".join(build_screen(s, urls) for s in screens[1:])
    return primary, secondary


def build_contrib(items: Sequence[str]) -> str:
    return "".join(f"<li>{escape(item)}</li>" for item in items)


def build_design_notes(notes: Optional[List[Dict[str, Any]]]) -> str:
    if not notes:
        return ""
    cards = "".join(
        f"""
      <div class="card note-card">
        <h3>{escape(note.get("heading"))}</h3>
        <p>{escape(note.get("body"))}</p>
      </div>
    """
        for note in notes
    )
    return f"""
    <section class="section">
      <h2>Design Notes</h2>
      <div class="screens-grid">{cards}</div>
    </section>
  """


def build_links(links: Optional[List[Dict[str, Any]]], urls: UrlResolver) -> str:
    if not links:
        return ""
    cards = []
    for li in links:
        note = f"<span>{escape(li['note'])}</span>" if li.get("note") else ""
        inner = f"<strong>{escape(li.get('label'))}</strong>{note}"
        cards.append(_anchor(li.get("url") or "", inner, urls, "card link-card"))
    cards_html = "".join(cards)
    return f"""
    <section class="section">
      <h2>Links</h2>
      <div class="links-grid">{cards_html}</div>
    </section>
  """


def build_ctas(ctas: Optional[List[Dict[str, Any]]], urls: UrlResolver) -> str:
    return "".join(
        _anchor(cta["url"], escape(cta["label"]), urls, "button")
        for cta in (ctas or [])[:2]
    )


def build_topbar_cta(ctas: Optional[List[Dict[str, Any]]], urls: UrlResolver) -> str:
    if not ctas:
        return ""
    return _anchor(ctas[0]["url"], escape(ctas[0]["label"]), urls, "topbar-cta")


def build_pagination(
    prev: Optional[Dict[str, Any]],
    next_: Optional[Dict[str, Any]],
    urls: UrlResolver,
) -> str:
    prev_html = (
        f'<a class="nav-prev" rel="prev" href="{escape(urls.project_path(prev["slug"]))}">&larr; {escape(prev["title"])}</a>'
        if prev
        else "<span></span>"
    )
    next_html = (
        f'<a class="nav-next" rel="next" href="{escape(urls.project_path(next_["slug"]))}">{escape(next_["title"])} &rarr;</a>'
        if next_
        else "<span></span>"
    )
    return f"""
    <nav class="nav-links" aria-label="Project navigation">
      {prev_html}
      <a class="nav-home" href="{escape(urls.home_path)}">All projects</a>
      {next_html}
    </nav>
  """


def build_project_card(project: Dict[str, Any], urls: UrlResolver) -> str:
    spans = derive_bento(project)
    featured = " featured" if project.get("featured") else ""
    return f"""
        <a class="card bento-card{featured}" href="{escape(urls.project_path(project["slug"]))}" style="{spans.style()}">
          <div class="media-frame" style="--media-aspect: 4 / 3;">
            <img src="{escape(urls.href(project["heroImage"]))}" alt="{escape(project["title"])} preview" loading="lazy" />
          </div>
          <div class="card-head">
            <img class="service-icon" src="{escape(urls.href(project["serviceIcon"]))}" alt="" aria-hidden="true" />
            <div class="tag-row">{build_tags(project["tags"])}</div>
          </div>
          <h3 class="card-title">{escape(project["title"])}</h3>
          <p class="card-summary">{escape(project["summary"])}</p>
          <span class="card-cta">View project &rarr;</span>
        </a>
      """


def build_project_cards(projects: Sequence[Dict[str, Any]], urls: UrlResolver) -> str:
    return "".join(build_project_card(p, urls) for p in projects)


def build_project_sections(
    projects: Sequence[Dict[str, Any]],
    sections: Sequence[str],
    urls: UrlResolver,
) -> str:
    """
    One bento grid per section, in `sections` order. Projects keep the order
    they are passed in; sections with no projects are skipped.
    """
    out = []
    for name in sections:
        members = [p for p in projects if p["section"] == name]
        if not members:
            continue
        anchor = slugify(name) or "section"
        out.append(
            f"""
    <section class="section project-section" id="{escape(anchor)}">
      <h2>{escape(name)}</h2>
      <div class="bento-grid">{build_project_cards(members, urls)}</div>
    </section>
  """
        )
    return "".join(out)
