"""
End-to-end tests for WikiMarkdown: string and file entry points.
"""
from __future__ import annotations

import pytest
from wikiconv.core.errors import WikiFileNotFoundError
from wikiconv.services.markdown import TocRender, WikiMarkdown


SAMPLE = "See [[Call Log]] and ![diagram](img.png)"


# ── String entry points ───────────────────────────────────────────────────────

def test_content_render_rewrites_link_and_embeds_image(md):
    html = md.render_content(SAMPLE)
    assert '<a href="#call-log">Call Log</a>' in html
    assert '<img src="data:image/png;base64,' in html
    assert 'src="img.png"' not in html


def test_toc_render_collects_item(md):
    result = md.render_toc(SAMPLE)
    assert isinstance(result, TocRender)
    assert [i.as_dict() for i in result.toc_items] == [
        {"title": "Call Log", "link": "Call-Log", "pageId": "call-log"},
    ]
    assert 'href="#call-log"' in result.toc_html


def test_content_render_is_an_html_fragment(md):
    html = md.render_content("# Title\n\nSome *text*.")
    assert "<h1>Title</h1>" in html
    assert "<em>text</em>" in html
    assert "<html" not in html


def test_tables_supported(md):
    html = md.render_content("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<table>" in html


def test_toc_items_property_is_a_copy(md):
    md.render_toc("- [[Home]]\n")
    items = md.toc_items
    items.clear()
    assert [i.page_id for i in md.toc_items] == ["home"]


def test_separate_instances_do_not_share_state(wiki_dir, aliases):
    first = WikiMarkdown(wiki_dir, aliases)
    first.render_toc("- [[Home]]\n")
    second = WikiMarkdown(wiki_dir, aliases)
    result = second.render_toc("- [[FAQ]]\n")
    assert [i.page_id for i in result.toc_items] == ["faq"]
    assert 'class="active"' in result.toc_html


def test_alias_set_accepted(wiki_dir):
    md = WikiMarkdown(wiki_dir, {"home"})
    assert md.render_toc("- [[Home]]\n").toc_items[0].page_id == "home"


# ── File entry points ─────────────────────────────────────────────────────────

def test_render_content_file_with_wrong_case(md, wiki_dir):
    (wiki_dir / "Sidebar.md").write_text("Go to [[Calls]]\n", encoding="utf-8")
    html = md.render_content_file(wiki_dir / "sidebar.MD")
    assert '<a href="#calls">Calls</a>' in html


def test_render_content_file_missing_raises(md, wiki_dir):
    with pytest.raises(WikiFileNotFoundError):
        md.render_content_file(wiki_dir / "Missing.md")


def test_render_toc_file(md, wiki_dir):
    (wiki_dir / "_Sidebar.md").write_text("- [[Home]]\n- [[FAQ]]\n", encoding="utf-8")
    result = md.render_toc_file(wiki_dir / "_sidebar.md")
    assert [i.page_id for i in result.toc_items] == ["home", "faq"]


def test_file_read_as_utf8(md, wiki_dir):
    (wiki_dir / "Unicode.md").write_text("Café ✓\n", encoding="utf-8")
    assert "Café ✓" in md.render_content_file(wiki_dir / "unicode.md")
