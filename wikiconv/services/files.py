#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
File helpers — case-insensitive path resolution and data URI embedding.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import base64
import logging
import mimetypes
import os

from wikiconv.core.errors import WikiFileNotFoundError

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def _split_segments(path: str) -> tuple[str, list[str]]:
    """Split *path* into its anchor ('' for relative paths) and its segments.

    The anchor keeps any drive, so ``C:Home.md`` gives ``("C:", ["Home.md"])``.
    """
    drive, head = os.path.splitdrive(path)
    segments: list[str] = []
    while True:
        parent, name = os.path.split(head)
        if name:
            segments.append(name)
        if parent in ("", os.curdir):
            return drive, segments[::-1]
        if parent.endswith(("/", "\\")) or parent == head:
            return drive + parent, segments[::-1]
        head = parent


def resolve_actual_filename(path: str | os.PathLike) -> str:
    """
    Return *path* with every segment in the casing used on disk.

    Wiki links rarely match the case of the files they point to, so each
    segment is looked up, ignoring case, in the listing of the directory
    resolved so far.  An exact match wins over other case variants.

    Raises WikiFileNotFoundError when a segment has no matching entry.  A
    segment whose parent cannot be listed (e.g. a UNC root on Windows, or a
    home directory with mode 0711) is kept as given.
    """
    path = os.fspath(path)
    if not os.path.basename(path):
        # handles passing in `c:\\` or `/`
        return path.upper()

    resolved, segments = _split_segments(path)
    for name in segments:
        if name in (os.curdir, os.pardir):
            resolved = os.path.join(resolved, name)
            continue
        try:
            entries = os.listdir(resolved or os.curdir)
        except OSError as exc:
            log.debug("Cannot list %r (%s), keeping %r as-is", resolved, exc, name)
            resolved = os.path.join(resolved, name)
            continue

        if name in entries:
            match = name
        else:
            wanted = name.lower()
            match = next((e for e in entries if e.lower() == wanted), None)
        if match is None:
            raise WikiFileNotFoundError(path)
        resolved = os.path.join(resolved, match)

    return resolved


# -----------------------------------------------------------------------------

def guess_mimetype(path: str | os.PathLike) -> str:
    mt, _ = mimetypes.guess_type(os.fspath(path))
    return mt or "application/octet-stream"


def file_to_data_uri(path: str | os.PathLike) -> str:
    """Read *path* and return it as a base64 ``data:`` URI."""
    with open(path, "rb") as f:
        data = f.read()
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{guess_mimetype(path)};base64,{b64}"


# -----------------------------------------------------------------------------
