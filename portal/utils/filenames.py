"""Helpers for deriving stored and display file names from uploads."""

import os
import re
import secrets
import time

_UNSAFE_CHARS = re.compile(r"[^\w\s.-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

DISPLAY_NAME_MAX_LENGTH = 50


def normalize_display_name(original_name: str | None) -> str:
    """Return a presentation-only name derived from a client file name.

    Drops characters other than word characters, whitespace, dots and hyphens,
    collapses whitespace to underscores and truncates the base name to 50
    characters. The extension is preserved.
    """
    if not original_name:
        return "unnamed_file"
    base_name, extension = os.path.splitext(os.path.basename(original_name))
    normalized = _UNSAFE_CHARS.sub("", base_name)
    normalized = _WHITESPACE.sub("_", normalized)
    return normalized[:DISPLAY_NAME_MAX_LENGTH] + extension


def safe_extension(original_name: str | None) -> str:
    """Return the lowercase extension of a client file name if it is plain ASCII alphanumerics."""
    if not original_name:
        return ""
    extension = os.path.splitext(os.path.basename(original_name))[1].lower()
    if re.fullmatch(r"\.[a-z0-9]{1,10}", extension):
        return extension
    return ""


def generate_stored_name(prefix: str, original_name: str | None) -> str:
    """Return `<prefix>-<ms timestamp>-<9 random digits><ext>`, independent of the client name."""
    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9):09d}"
    return f"{prefix}-{unique_suffix}{safe_extension(original_name)}"
