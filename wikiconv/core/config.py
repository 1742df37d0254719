#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Converter configuration.

All values can be overridden via WIKICONV_* environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="WIKICONV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Content rendering ─────────────────────────────────────────────────

    code_css_class: str = "hljs"
    pygments_style: str = "friendly"
    missing_image_class: str = "missing-file"

    # ── TOC rendering ─────────────────────────────────────────────────────

    toc_list_class: str = "nav"
    toc_active_class: str = "active"

    # ── Source files ──────────────────────────────────────────────────────

    file_encoding: str = "utf-8"


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
