#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Exceptions raised by the converter.

Only filesystem existence failures are raised; markdown content problems
are reported as diagnostics and never abort a render.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os


# -----------------------------------------------------------------------------

class WikiConvError(Exception):
    """Base class for converter errors."""


class WikiFileNotFoundError(WikiConvError, FileNotFoundError):
    """No directory entry matches the requested file, ignoring case."""

    def __init__(self, path: str | os.PathLike):
        self.path = os.fspath(path)
        super().__init__(f"{self.path} does not exist")


# -----------------------------------------------------------------------------
