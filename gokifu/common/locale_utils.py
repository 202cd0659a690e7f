# -*- coding: utf-8 -*-
"""Language code utilities.

Canonical internal language codes: "jp", "en". Display labels throughout
GoKifu are keyed by these codes.
"""
from typing import Literal

InternalLangCode = Literal["en", "jp"]

DEFAULT_LANG: InternalLangCode = "jp"

# Mapping to internal canonical codes
_TO_INTERNAL: dict[str, InternalLangCode] = {"ja": "jp", "jp": "jp", "en": "en"}


def normalize_lang_code(lang: str | None) -> InternalLangCode:
    """Normalize a language code to "jp" or "en".

    Accepts ISO "ja" as alias for "jp" and reduces region variants.
    None, empty and unknown codes fall back to DEFAULT_LANG ("jp"),
    the language of the record labels.

    Examples:
        >>> normalize_lang_code("ja_JP")
        'jp'
        >>> normalize_lang_code(" EN ")
        'en'
        >>> normalize_lang_code("en-US")
        'en'
        >>> normalize_lang_code(None)
        'jp'
        >>> normalize_lang_code("fr")
        'jp'
    """
    if not lang:
        return DEFAULT_LANG

    normalized = lang.strip().lower()
    if not normalized:
        return DEFAULT_LANG

    # "ja_JP" -> "ja", "en-US" -> "en"
    for sep in ("_", "-"):
        if sep in normalized:
            normalized = normalized.split(sep)[0]
            break

    return _TO_INTERNAL.get(normalized, DEFAULT_LANG)
