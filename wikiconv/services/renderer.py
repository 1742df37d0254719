#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markdown renderer
=================
Renders wiki markdown to HTML via mistune.

Markdown is parsed into mistune's token tree and every node is passed
through ``TreeRenderer``, which looks the node type up in a table of
handler functions before falling back to mistune's stock HTML output.
Two handler tables are provided:

  - ``ContentStrategy`` : page content (highlighted code, internal anchors,
                          images embedded as data URIs)
  - ``TocStrategy``     : navigation list built from the wiki's TOC page,
                          collecting a ``TocItem`` for every known page

Both strategies share a ``TocContext`` passed in by the caller; the content
strategy reads the links collected by an earlier TOC render from it.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, Mapping, Optional
from urllib.parse import unquote

import mistune
from mistune.plugins.formatting import strikethrough
from mistune.plugins.table import table
from mistune.plugins.url import url
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from wikiconv.core.config import Settings, get_settings
from .files import file_to_data_uri, resolve_actual_filename
from .pages import resolve_page_id

log = logging.getLogger(__name__)


_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_LEADING_TEXT_RE = re.compile(r"^([^<]+)")
_STRIP_TAGS_RE = re.compile(r"<[^>]+>")


def is_absolute_url(href: str) -> bool:
    return bool(_ABSOLUTE_URL_RE.match(href))


def _starts_with_link(item: dict) -> bool:
    """True when a list item's body opens with a link (tight lists only)."""
    children = item.get("children") or []
    if not children or children[0]["type"] != "block_text":
        return False
    inline = children[0].get("children") or []
    return bool(inline) and inline[0]["type"] == "link"


# -----------------------------------------------------------------------------
# Shared state
# -----------------------------------------------------------------------------

@dataclass
class TocItem:
    title: str
    link: str
    page_id: str

    def as_dict(self) -> dict[str, str]:
        return {"title": self.title, "link": self.link, "pageId": self.page_id}


@dataclass
class TocContext:
    """TOC items collected so far and whether the active item was marked."""
    items: list[TocItem] = field(default_factory=list)
    active_marked: bool = False

    def is_toc_link(self, href: str) -> bool:
        return any(item.link == href for item in self.items)


@dataclass
class Diagnostic:
    kind: str
    message: str
    href: str
    page_id: Optional[str] = None


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: report through the module logger."""
    log.warning("%s: %s", diagnostic.kind, diagnostic.message)


# -----------------------------------------------------------------------------
# Token tree renderer
# -----------------------------------------------------------------------------

NodeHandler = Callable[["TreeRenderer", dict, Any], str]


class TreeRenderer(mistune.HTMLRenderer):
    """HTML renderer dispatching token types to a table of handlers."""

    def __init__(self, handlers: Mapping[str, NodeHandler]):
        super().__init__(escape=False)
        self._handlers = dict(handlers)

    def render_token(self, token: dict, state) -> str:
        handler = self._handlers.get(token["type"])
        if handler is not None:
            return handler(self, token, state)
        return super().render_token(token, state)

    def render_children(self, token: dict, state) -> str:
        return self.render_tokens(token.get("children") or [], state)


def render_markdown(markdown: str, handlers: Mapping[str, NodeHandler]) -> str:
    """Parse *markdown* and render it with the given node handlers."""
    md = mistune.create_markdown(
        renderer=TreeRenderer(handlers),
        plugins=[table, strikethrough, url],
    )
    return md(markdown)


# -----------------------------------------------------------------------------
# Syntax highlighting via Pygments
# -----------------------------------------------------------------------------

def _pick_lexer(code: str, lang: str):
    if lang:
        try:
            return get_lexer_by_name(lang, stripall=True)
        except ClassNotFound:
            pass
    try:
        return guess_lexer(code, stripall=True)
    except ClassNotFound:
        return TextLexer()


def highlight_code(code: str, lang: str = "", css_class: str = "hljs") -> str:
    """Highlight *code* using Pygments.  Falls back to escaped plain text."""
    lang = lang.strip()
    try:
        body = highlight(code, _pick_lexer(code, lang), HtmlFormatter(nowrap=True))
    except Exception as exc:  # pygments lexers can fail on odd input
        log.debug("Highlighting failed for lang=%r: %s", lang, exc)
        body = _html.escape(code)
    return f'<pre class="{css_class}">{body}</pre>'


def highlight_stylesheet(style: str = "friendly", css_class: str = "hljs") -> str:
    """Return the Pygments CSS rules for code blocks rendered by highlight_code()."""
    return HtmlFormatter(style=style).get_style_defs(f".{css_class}")


# -----------------------------------------------------------------------------
# Content strategy
# -----------------------------------------------------------------------------

class ContentStrategy:
    """Node handlers for page content."""

    def __init__(
        self,
        wiki_path: str | os.PathLike,
        toc: TocContext,
        settings: Settings | None = None,
        on_diagnostic: DiagnosticSink = log_diagnostic,
    ):
        self.wiki_path = os.fspath(wiki_path)
        self.toc = toc
        self.settings = settings or get_settings()
        self.on_diagnostic = on_diagnostic

    @property
    def handlers(self) -> dict[str, NodeHandler]:
        return {
            "block_code": self.block_code,
            "link": self.link,
            "image": self.image,
        }

    def block_code(self, renderer: TreeRenderer, token: dict, state) -> str:
        info = (token.get("attrs") or {}).get("info") or ""
        lang = info.split()[0] if info.strip() else ""
        return highlight_code(token["raw"], lang, self.settings.code_css_class)

    def link(self, renderer: TreeRenderer, token: dict, state) -> str:
        href = token["attrs"]["url"]
        text = renderer.render_children(token, state)
        if not is_absolute_url(href) or self.toc.is_toc_link(href):
            href = "#" + resolve_page_id(href).lower()
        return f'<a href="{href}">{text}</a>'

    def image(self, renderer: TreeRenderer, token: dict, state) -> str:
        href = token["attrs"]["url"]
        alt = _STRIP_TAGS_RE.sub("", renderer.render_children(token, state))
        if is_absolute_url(href):
            return f'<img src="{href}" alt="{alt}" />'

        path = os.path.join(self.wiki_path, unquote(_html.unescape(href)))
        try:
            src = file_to_data_uri(resolve_actual_filename(os.path.abspath(path)))
        except OSError as exc:
            self.on_diagnostic(Diagnostic(
                kind="missing-image",
                message=f"Cannot embed image {href}: {exc}",
                href=href,
            ))
            return f'<img src="{href}" alt="{alt}" class="{self.settings.missing_image_class}" />'
        return f'<img src="{src}" alt="{alt}" />'


# -----------------------------------------------------------------------------
# TOC strategy
# -----------------------------------------------------------------------------

class TocStrategy:
    """Node handlers for the navigation list built from a TOC page."""

    def __init__(
        self,
        aliases: Collection[str],
        toc: TocContext,
        settings: Settings | None = None,
        on_diagnostic: DiagnosticSink = log_diagnostic,
    ):
        self.aliases = aliases
        self.toc = toc
        self.settings = settings or get_settings()
        self.on_diagnostic = on_diagnostic

    @property
    def handlers(self) -> dict[str, NodeHandler]:
        return {
            "list": self.list,
            "list_item": self.list_item,
            "link": self.link,
        }

    def list(self, renderer: TreeRenderer, token: dict, state) -> str:
        tag = "ol" if (token.get("attrs") or {}).get("ordered") else "ul"
        body = renderer.render_children(token, state)
        return f'<{tag} class="{self.settings.toc_list_class}">{body}</{tag}>'

    def list_item(self, renderer: TreeRenderer, token: dict, state) -> str:
        # Claim the active marker before rendering nested lists so it goes to
        # the first item in document order, not the innermost one.
        active = not self.toc.active_marked and _starts_with_link(token)
        if active:
            self.toc.active_marked = True

        text = renderer.render_children(token, state)
        m = _LEADING_TEXT_RE.match(text)
        if m:
            text = f"<span>{m.group(0)}</span>{text[m.end():]}"

        if active:
            return f'<li class="{self.settings.toc_active_class}">{text}</li>'
        return f"<li>{text}</li>"

    def link(self, renderer: TreeRenderer, token: dict, state) -> str:
        href = token["attrs"]["url"]
        text = renderer.render_children(token, state)
        page_id = resolve_page_id(href).lower()
        decoded_id = resolve_page_id(_html.unescape(href)).lower()

        for candidate in (page_id, decoded_id):
            if candidate and candidate in self.aliases:
                self.toc.items.append(TocItem(title=text, link=href, page_id=candidate))
                return f'<a href="#{candidate}">{text}</a>'

        self.on_diagnostic(Diagnostic(
            kind="unresolved-toc-link",
            message=f"Did not find {href} with page id {page_id!r} or decoded page id {decoded_id!r}",
            href=href,
            page_id=page_id,
        ))
        return f'<a href="{href}">{text}</a>'


# -----------------------------------------------------------------------------
