"""Catalog validation and loading from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from intent_matcher.services.errors import CatalogFormatError


def validate_catalog(data: Any) -> Dict[str, List[str]]:
    """Check that `data` is {intent_name: [example, ...]} and return a copy.

    Raises CatalogFormatError naming the first offending intent.
    """
    if not isinstance(data, dict):
        raise CatalogFormatError(
            "The 'intents' field must be an object where each key is an intent and its value is an array of examples"
        )
    catalog: Dict[str, List[str]] = {}
    for name, examples in data.items():
        if not isinstance(name, str) or not name.strip():
            raise CatalogFormatError("Intent names must be non-empty strings", {"intent": name})
        if not isinstance(examples, list):
            raise CatalogFormatError(f"The intent '{name}' must be an array of examples", {"intent": name})
        for ex in examples:
            if not isinstance(ex, str):
                raise CatalogFormatError(
                    f"The intent '{name}' must only contain string examples", {"intent": name, "example": ex}
                )
        catalog[name] = list(examples)
    return catalog


def load_catalog(path: str | Path) -> Dict[str, List[str]]:
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogFormatError(f"Catalog file not found: {p}", {"path": str(p)}) from e
    except json.JSONDecodeError as e:
        raise CatalogFormatError(f"Catalog file is not valid JSON: {p} ({e})", {"path": str(p)}) from e
    return validate_catalog(data)


__all__ = ["load_catalog", "validate_catalog"]
