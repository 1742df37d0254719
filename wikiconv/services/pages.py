#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page identifiers and wiki links
===============================
Helpers that turn filenames and link targets into the canonical page
identifiers used to match links against the pages of a wiki, and the
preprocessor that rewrites ``[[...]]`` wiki links to plain markdown links.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Iterable


# -----------------------------------------------------------------------------
# Page identifiers
# -----------------------------------------------------------------------------

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")

_UNSAFE_ID_CHARS_RE = re.compile(r"[^A-Za-z0-9_~-]+")


def resolve_page_id(value: str) -> str:
    """Return the page identifier for a filename or link target.

    ``docs/Call-Log.md`` and ``Call-Log#usage`` both give ``Call-Log``.
    Case is preserved; compare the result case-insensitively.
    """
    value = value or ""
    path, _, fragment = value.partition("#")
    path = path.split("?", 1)[0]
    base = re.split(r"[/\\]", path)[-1] if path else fragment
    if base.lower().endswith(MARKDOWN_EXTENSIONS):
        base = base[:base.rindex(".")]
    return _UNSAFE_ID_CHARS_RE.sub("", base)


def build_alias_table(names: Iterable[str]) -> dict[str, bool]:
    """Build an alias table from page names or filenames."""
    table: dict[str, bool] = {}
    for name in names:
        page_id = resolve_page_id(name).lower()
        if page_id:
            table[page_id] = True
    return table


# -----------------------------------------------------------------------------
# Wiki links  [[Title|Page Name]] → [Title](Page-Name)
# -----------------------------------------------------------------------------

_WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")


def rewrite_wiki_links(markdown: str) -> str:
    """
    Convert ``[[...]]`` wiki links to standard markdown links.

    Three forms are recognised:

      - page name only      [[Calls]], [[Call-Log]]
      - link title only     [[Call Log]]
      - title and page name [[Call Log|Call-Log]], [[Log|Call Log]]

    Spaces in the page name are replaced with hyphens to match wiki
    filenames.  Unterminated brackets are left untouched.
    """
    def _replace(m: re.Match) -> str:
        link = m.group(1)
        title, sep, _ = link.partition("|")
        page = link.rpartition("|")[2] if sep else link
        if not title:
            title = link
        if not page:
            page = link
        return f"[{title}]({page.replace(' ', '-')})"

    return _WIKILINK_RE.sub(_replace, markdown)


# -----------------------------------------------------------------------------
