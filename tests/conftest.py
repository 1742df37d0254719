#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for wikiconv tests.
Each wiki is laid out in a pytest tmp_path so no fixture files are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from wikiconv.services.markdown import WikiMarkdown
from wikiconv.services.pages import build_alias_table


# -----------------------------------------------------------------------------

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)

PAGES = ["Home.md", "Calls.md", "Call-Log.md", "Getting-Started.md", "FAQ.md"]


# -----------------------------------------------------------------------------

@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def wiki_dir(tmp_path, png_bytes):
    """A small wiki: one file per page plus an image in a sub-directory."""
    for name in PAGES:
        (tmp_path / name).write_text(f"# {name[:-3]}\n", encoding="utf-8")
    (tmp_path / "Images").mkdir()
    (tmp_path / "Images" / "Diagram.png").write_bytes(png_bytes)
    (tmp_path / "img.png").write_bytes(png_bytes)
    return tmp_path


@pytest.fixture
def aliases():
    return build_alias_table(PAGES)


@pytest.fixture
def diagnostics():
    """Collects diagnostics instead of logging them."""
    return []


@pytest.fixture
def md(wiki_dir, aliases, diagnostics):
    return WikiMarkdown(wiki_dir, aliases, on_diagnostic=diagnostics.append)


# -----------------------------------------------------------------------------
