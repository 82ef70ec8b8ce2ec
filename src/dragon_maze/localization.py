"""Lightweight python-i18n wrapper for UI strings."""

from __future__ import annotations

from importlib import resources
from typing import Any

import i18n

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en",)

_CURRENT_LANGUAGE = DEFAULT_LANGUAGE
_CONFIGURED = False


def _configure_backend() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    load_path = str(resources.files("dragon_maze").joinpath("locales"))
    if load_path not in i18n.load_path:
        i18n.load_path.append(load_path)
    i18n.set("filename_format", "{namespace}.{locale}.{format}")
    i18n.set("file_format", "json")
    i18n.set("fallback", DEFAULT_LANGUAGE)
    i18n.set("error_on_missing_translation", False)
    i18n.set("enable_memoization", True)
    _CONFIGURED = True


def set_language(code: str | None) -> str:
    """Configure the active language, returning the resolved code."""
    global _CURRENT_LANGUAGE
    _configure_backend()
    resolved = code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
    i18n.set("locale", resolved)
    _CURRENT_LANGUAGE = resolved
    return resolved


def get_language() -> str:
    return _CURRENT_LANGUAGE


def translate(key: str, **kwargs: Any) -> str:
    if not _CONFIGURED:
        set_language(_CURRENT_LANGUAGE)
    qualified_key = key if key.startswith("ui.") else f"ui.{key}"
    return i18n.t(qualified_key, default=key, **kwargs)


__all__ = [
    "DEFAULT_LANGUAGE",
    "get_language",
    "set_language",
    "translate",
]
