"""End-to-end tests for portfolio.site."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from portfolio.site import build_site, render_site, resolve_base_path, sort_projects, write_site
from portfolio.validate import ContentError
from tests._fixtures.content import (
    INDEX_TEMPLATE,
    PROJECT_TEMPLATE,
    make_content,
    make_project,
    write_inputs,
)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_minimal_build(tmp_path: Path) -> None:
    paths = write_inputs(tmp_path, make_content())

    written = build_site(paths["content"], paths["templates"], paths["out"])

    assert written == ["index.html", "projects/demo/index.html"]
    index_html = _read(paths["out"] / "index.html")
    page_html = _read(paths["out"] / "projects" / "demo" / "index.html")
    assert 'href="/projects/demo/"' in index_html
    assert "Project demo" in page_html
    assert "Summary of demo." in page_html
    assert '<link rel="canonical" href="https://example.com/projects/demo/" />' in page_html
    assert '<link rel="canonical" href="https://example.com/" />' in index_html


def test_projects_render_in_ascending_order(content: Dict[str, Any]) -> None:
    pages = render_site(content, INDEX_TEMPLATE, PROJECT_TEMPLATE)

    assert list(pages) == [
        "index.html",
        "projects/alpha/index.html",
        "projects/beta/index.html",
        "projects/gamma/index.html",
    ]
    assert [p["slug"] for p in sort_projects(content["projects"])] == ["alpha", "beta", "gamma"]


def test_pagination_links_match_sorted_neighbours(content: Dict[str, Any]) -> None:
    pages = render_site(content, INDEX_TEMPLATE, PROJECT_TEMPLATE)

    alpha = pages["projects/alpha/index.html"]
    beta = pages["projects/beta/index.html"]
    gamma = pages["projects/gamma/index.html"]
    assert 'rel="prev"' not in alpha
    assert 'rel="next" href="/projects/beta/"' in alpha
    assert 'rel="prev" href="/projects/alpha/"' in beta
    assert 'rel="next" href="/projects/gamma/"' in beta
    assert 'rel="prev" href="/projects/beta/"' in gamma
    assert 'rel="next"' not in gamma
    assert 'class="nav-home" href="/"' in gamma


def test_index_groups_projects_by_section(content: Dict[str, Any]) -> None:
    index_html = render_site(content, INDEX_TEMPLATE, PROJECT_TEMPLATE)["index.html"]

    work = index_html.index('id="work"')
    play = index_html.index('id="play"')
    assert work < index_html.index("/projects/alpha/") < index_html.index("/projects/beta/") < play
    assert play < index_html.index("/projects/gamma/")


def test_base_path_applies_to_every_reference(content: Dict[str, Any]) -> None:
    content["site"]["basePath"] = "portfolio/"

    pages = render_site(content, INDEX_TEMPLATE, PROJECT_TEMPLATE)

    index_html = pages["index.html"]
    beta = pages["projects/beta/index.html"]
    assert 'href="/portfolio/projects/alpha/"' in index_html
    assert 'content="https://example.com/portfolio/assets/og.png"' in index_html
    assert 'src="/portfolio/assets/beta/hero.png"' in beta
    assert 'href="https://example.com/portfolio/projects/beta/"' in beta
    assert 'href="/portfolio/projects/alpha/"' in beta


def test_base_path_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    site = {"basePath": "/from-content"}

    assert resolve_base_path(site) == "/from-content"
    monkeypatch.setenv("PORTFOLIO_BASE_PATH", "/from-env")
    assert resolve_base_path(site) == "/from-env"
    assert resolve_base_path(site, "/from-flag") == "/from-flag"
    assert resolve_base_path(site, "") == ""


def test_title_is_escaped_in_both_pages() -> None:
    nasty = "<i>R&D</i> \"quotes\" 'single'"
    doc = make_content([make_project(title=nasty)], title=nasty)

    pages = render_site(doc, INDEX_TEMPLATE, PROJECT_TEMPLATE)

    escaped = "&lt;i&gt;R&amp;D&lt;/i&gt; &quot;quotes&quot; &#x27;single&#x27;"
    for html in pages.values():
        assert "<i>" not in html
        assert escaped in html


def test_json_ld_embedded_per_page(content: Dict[str, Any]) -> None:
    pages = render_site(content, INDEX_TEMPLATE, PROJECT_TEMPLATE)

    assert '"@type": "WebSite"' in pages["index.html"]
    assert '"@type": "CreativeWork"' not in pages["index.html"]
    assert '"@type": "CreativeWork"' in pages["projects/alpha/index.html"]


def test_meta_description_is_truncated() -> None:
    doc = make_content(description="d" * 400)

    index_html = render_site(doc, INDEX_TEMPLATE, PROJECT_TEMPLATE)["index.html"]

    assert f'content="{"d" * 159}…"' in index_html
    assert "d" * 400 in index_html


def test_invalid_content_writes_nothing(tmp_path: Path) -> None:
    doc = make_content([make_project("dup", order=1), make_project("dup", order=2)])
    paths = write_inputs(tmp_path, doc)

    with pytest.raises(ContentError):
        build_site(paths["content"], paths["templates"], paths["out"])

    assert not paths["out"].exists()


def test_stale_project_folders_are_removed(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "site"
    stale = out / "projects" / "old-slug"
    stale.mkdir(parents=True)
    (stale / "index.html").write_text("old", encoding="utf-8")

    write_site(render_site(make_content(), INDEX_TEMPLATE, PROJECT_TEMPLATE), out)

    assert not stale.exists()
    assert (out / "projects" / "demo" / "index.html").exists()
    assert "removing stale project folder old-slug" in capsys.readouterr().out


def test_rebuild_is_byte_identical(tmp_path: Path, content: Dict[str, Any]) -> None:
    paths = write_inputs(tmp_path, content)

    first = build_site(paths["content"], paths["templates"], paths["out"])
    snapshot = {rel: (paths["out"] / rel).read_bytes() for rel in first}
    second = build_site(paths["content"], paths["templates"], paths["out"])

    assert first == second
    assert {rel: (paths["out"] / rel).read_bytes() for rel in second} == snapshot


def test_yaml_content_document(tmp_path: Path) -> None:
    paths = write_inputs(tmp_path, make_content())
    yml = tmp_path / "content.yml"
    yml.write_text(yaml.safe_dump(make_content(), allow_unicode=True), encoding="utf-8")

    written = build_site(yml, paths["templates"], paths["out"])

    assert written == ["index.html", "projects/demo/index.html"]


def test_missing_template_raises(tmp_path: Path) -> None:
    paths = write_inputs(tmp_path, make_content())
    (paths["templates"] / "project.template.html").unlink()

    with pytest.raises(FileNotFoundError):
        build_site(paths["content"], paths["templates"], paths["out"])
