"""Normalize requested translation identifiers to the supported set."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from reading_plan_engine.core.config import config

SUPPORTED_VERSIONS: Tuple[str, ...] = ("nvi", "acf", "ara", "arc", "naa", "ntlh", "nvt")
FALLBACK_VERSION = "nvi"

# Synonyms collapse onto one supported code (and therefore one cache key).
VERSION_ALIASES: Dict[str, str] = {
    "ra": "ara",
    "aa": "ara",
    "almeida": "arc",
    "rc": "arc",
    "nvi-pt": "nvi",
    "nvipt": "nvi",
}


def default_version() -> str:
    """Return the configured primary version, guarded against bad config."""
    configured = str(getattr(config, "DEFAULT_BIBLE_VERSION", FALLBACK_VERSION)).strip().lower()
    configured = VERSION_ALIASES.get(configured, configured)
    return configured if configured in SUPPORTED_VERSIONS else FALLBACK_VERSION


def normalize_version(version: Optional[str]) -> str:
    """Map any input to a member of ``SUPPORTED_VERSIONS``."""
    if not version:
        return default_version()
    key = str(version).strip().lower()
    key = VERSION_ALIASES.get(key, key)
    if key in SUPPORTED_VERSIONS:
        return key
    return default_version()


__all__ = [
    "FALLBACK_VERSION",
    "SUPPORTED_VERSIONS",
    "VERSION_ALIASES",
    "default_version",
    "normalize_version",
]
