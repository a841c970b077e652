"""Errors raised around the classifier core (catalog loading, options, strategy lookup).

Classification itself never raises; these cover the inputs callers hand in.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class IntentMatcherError(Exception):
    code = "intent_matcher_error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class CatalogFormatError(IntentMatcherError):
    """Catalog is not a mapping of intent name -> list of example strings."""

    code = "invalid_catalog"


class InvalidOptionsError(IntentMatcherError, ValueError):
    code = "invalid_options"


class UnknownStrategyError(IntentMatcherError):
    code = "unknown_strategy"


__all__ = [
    "CatalogFormatError",
    "IntentMatcherError",
    "InvalidOptionsError",
    "UnknownStrategyError",
]
