"""Text normalization and tokenization shared by indexing and classification."""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

_WHITESPACE_RE = re.compile(r"\s+")

# Kept besides letters, digits and whitespace: "/start", "1.- Saldo"
_KEPT_PUNCTUATION = frozenset("/.-")


def _strip_accents(text: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFD", text)
        if not unicodedata.category(c).startswith("M")
    )


def _is_kept(char: str) -> bool:
    if char in _KEPT_PUNCTUATION or char.isspace():
        return True
    category = unicodedata.category(char)
    return category[0] in ("L", "N")


def normalize(text: Optional[str]) -> str:
    """Canonical form for matching: "¿Qué TAL?!" -> "que tal".

    - lowercase
    - accents removed (NFD, then drop combining marks of any M* category)
    - anything but letters, digits, whitespace, "/", "." and "-" becomes a space
    - whitespace collapsed and trimmed
    """
    if not text:
        return ""
    lowered = _strip_accents(text.lower())
    cleaned = "".join(c if _is_kept(c) else " " for c in lowered)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def tokenize(text: Optional[str]) -> List[str]:
    return [tok for tok in normalize(text).split(" ") if tok]


__all__ = ["normalize", "tokenize"]
