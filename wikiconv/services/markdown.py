#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Wiki markdown conversion
========================
``WikiMarkdown`` renders the pages of one wiki.  It is built once per
conversion run with the wiki's base directory and its alias table, and owns
the ``TocContext`` that the TOC render fills and the content render reads:

    md = WikiMarkdown("/path/to/wiki", build_alias_table(filenames))
    toc = md.render_toc_file("/path/to/wiki/_Sidebar.md")
    for item in toc.toc_items:
        html = md.render_content_file(f"/path/to/wiki/{item.page_id}.md")

There is no reset: build a new instance for each run.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Collection, Optional

from wikiconv.core.config import Settings, get_settings
from .files import resolve_actual_filename
from .pages import rewrite_wiki_links
from .renderer import (
    ContentStrategy,
    DiagnosticSink,
    TocContext,
    TocItem,
    TocStrategy,
    highlight_stylesheet,
    log_diagnostic,
    render_markdown,
)


# -----------------------------------------------------------------------------

@dataclass
class TocRender:
    toc_html: str
    toc_items: list[TocItem]


# -----------------------------------------------------------------------------

class WikiMarkdown:

    def __init__(
        self,
        wiki_path: str | os.PathLike,
        aliases: Collection[str],
        settings: Optional[Settings] = None,
        on_diagnostic: Optional[DiagnosticSink] = None,
    ):
        self.wiki_path = os.fspath(wiki_path)
        self.aliases = aliases
        self.settings = settings or get_settings()
        self._toc = TocContext()
        sink = on_diagnostic or log_diagnostic
        self._content = ContentStrategy(self.wiki_path, self._toc, self.settings, sink)
        self._toc_strategy = TocStrategy(aliases, self._toc, self.settings, sink)

    @property
    def toc_items(self) -> list[TocItem]:
        return list(self._toc.items)

    # ── Content ───────────────────────────────────────────────────────────

    def render_content(self, markdown: str) -> str:
        """Render page content to an HTML fragment."""
        return render_markdown(rewrite_wiki_links(markdown), self._content.handlers)

    def render_content_file(self, path: str | os.PathLike) -> str:
        """Read a markdown file, fixing the case of its path first, and render it."""
        return self.render_content(self._read(path))

    # ── TOC ───────────────────────────────────────────────────────────────

    def render_toc(self, markdown: str) -> TocRender:
        """
        Render a TOC page to a navigation list.

        ``toc_items`` holds every item collected by this instance so far,
        including those from earlier TOC renders.
        """
        html = render_markdown(rewrite_wiki_links(markdown), self._toc_strategy.handlers)
        return TocRender(toc_html=html, toc_items=self.toc_items)

    def render_toc_file(self, path: str | os.PathLike) -> TocRender:
        return self.render_toc(self._read(path))

    def stylesheet(self) -> str:
        """CSS for the highlighted code blocks in rendered content."""
        return highlight_stylesheet(self.settings.pygments_style, self.settings.code_css_class)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _read(self, path: str | os.PathLike) -> str:
        actual = resolve_actual_filename(path)
        with open(actual, encoding=self.settings.file_encoding) as f:
            return f.read()


# -----------------------------------------------------------------------------
