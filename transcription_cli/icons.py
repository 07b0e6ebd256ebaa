#!/usr/bin/env python3
"""
icons.py - Icon definitions for transcription-cli output

Usage:
    from transcription_cli.icons import CREATE
    click.echo(f"{CREATE} Created: {path}")

Set TRANSCRIPTION_ASCII_ICONS=1 for terminals without unicode support.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Icon set used by the CLI and the log formatter.

    Categories:
    - Log levels: ERROR, WARNING, INFO, DEBUG
    - Actions: CREATE
    """

    ERROR: str = "❌"
    WARNING: str = "⚠️"
    INFO: str = "ℹ️"
    DEBUG: str = "🔍"

    CREATE: str = "➕"


@dataclass(frozen=True)
class AsciiIcons(Icons):
    """ASCII-only fallback icons for limited terminals."""

    ERROR: str = "[X]"
    WARNING: str = "[!]"
    INFO: str = "[i]"
    DEBUG: str = "[.]"

    CREATE: str = "[+]"


def _ascii_requested() -> bool:
    return os.environ.get("TRANSCRIPTION_ASCII_ICONS", "").lower() in {"1", "true", "yes", "on"}


icons = AsciiIcons() if _ascii_requested() else Icons()

CREATE = icons.CREATE
